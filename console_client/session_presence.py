from __future__ import annotations

from typing import Optional, Protocol, Sequence

AUTH_TOKEN_KEY = "auth_token"
AUTH_USER_KEY = "auth_user"


class CredentialSource(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...


class SessionPresenceCheck:
    """Answers whether a cached credential pair exists, without validating it.

    Providers are queried in priority order (persistent scope first) and each
    field is resolved independently, so the token and user may come from
    different scopes.
    """

    def __init__(self, providers: Sequence[CredentialSource]) -> None:
        self._providers = tuple(providers)

    def lookup(self, key: str) -> Optional[str]:
        for provider in self._providers:
            value = provider.get_item(key)
            if value:
                return value
        return None

    def is_authenticated(self) -> bool:
        return bool(self.lookup(AUTH_TOKEN_KEY) and self.lookup(AUTH_USER_KEY))

    def current_user(self) -> Optional[str]:
        return self.lookup(AUTH_USER_KEY)
