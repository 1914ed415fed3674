from dataclasses import dataclass
from typing import Protocol

@dataclass(frozen=True)
class AuthIdentity:
    id: str
    email: str

class AuthProvider(Protocol):
    name: str
    async def get_user(self, token: str) -> AuthIdentity:
        ...
