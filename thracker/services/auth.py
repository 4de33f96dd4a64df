from __future__ import annotations
from typing import Dict, Optional, Protocol


class Authenticator(Protocol):
    def authenticate(self, token: Optional[str]) -> Optional[str]:
        """Return the caller's user id, or None when the token is missing or unknown."""
        ...


class StaticTokenAuthenticator:
    def __init__(self, tokens: Dict[str, str]):
        self.tokens = dict(tokens)

    def authenticate(self, token: Optional[str]) -> Optional[str]:
        if not token:
            return None
        return self.tokens.get(token)


def bearer_token(header: Optional[str]) -> Optional[str]:
    if not header:
        return None
    scheme, _, token = header.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
