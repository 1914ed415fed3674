from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    DB_URL: str = "sqlite:///./jobboard.db"

    AUTH_URL: str = "http://localhost:54321"
    AUTH_API_KEY: str | None = None
    AUTH_TIMEOUT: float = 10.0

    LOG_LEVEL: str = "INFO"

    # salary slider bounds; a bound equal to its default is "unset"
    SALARY_FLOOR: int = 0
    SALARY_CEILING: int = 200_000
    HIGH_SALARY_THRESHOLD: int = 100_000

    TECH_TITLE_TERMS: list[str] = ["developer", "engineer", "programmer", "tech"]

    DEFAULT_CURRENCY: str = "USD"
    JOB_TTL_DAYS: int = 30
    EXPIRY_SWEEP_MINUTES: int = 60

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
