# jobboard/providers/hosted_auth.py
import logging

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from .base import AuthIdentity, AuthProvider
from ..config import settings
from ..errors import AuthError

logger = logging.getLogger(__name__)

USER_PATH = "/auth/v1/user"


class HostedAuthProvider(AuthProvider):
    """Resolves a session token to a user through a hosted GoTrue-style API."""

    name = "hosted"

    def __init__(self, base_url: str | None = None, api_key: str | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = (base_url or settings.AUTH_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.AUTH_API_KEY
        self._transport = transport

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        wait=wait_exponential(min=1, max=8),
        stop=stop_after_attempt(3),
        reraise=True,
    )
    async def _fetch(self, token: str) -> httpx.Response:
        headers = {"Authorization": f"Bearer {token}"}
        if self.api_key:
            headers["apikey"] = self.api_key
        async with httpx.AsyncClient(base_url=self.base_url, timeout=settings.AUTH_TIMEOUT, transport=self._transport) as client:
            return await client.get(USER_PATH, headers=headers)

    async def get_user(self, token: str) -> AuthIdentity:
        if not token:
            raise AuthError("missing session token")
        try:
            r = await self._fetch(token)
        except httpx.TransportError as e:
            logger.error("[auth] provider unreachable: %s", e)
            raise AuthError("auth provider unreachable") from e

        if r.status_code in (401, 403):
            raise AuthError("invalid or expired session")
        if r.status_code != 200:
            logger.error("[auth] unexpected status %s from provider", r.status_code)
            raise AuthError(f"auth provider returned {r.status_code}")

        data = r.json()
        uid = data.get("id")
        if not uid:
            raise AuthError("auth provider returned no user id")
        return AuthIdentity(id=str(uid), email=data.get("email") or "")
