"""Auth provider: how credentials reach outgoing requests.

Two variants only:

- `AuthToken` puts a Keystone token into `X-Auth-Token`.
- `NoAuth` leaves the headers untouched (standalone services, endpoint
  overrides without Keystone).

The validity state is informational: the session layer decides whether to
re-authenticate, this module never refreshes anything.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import MutableMapping, Union

from core.errors import AuthHeaderError

AUTH_TOKEN_HEADER = "X-Auth-Token"


class AuthState(str, Enum):
    VALID = "valid"
    EXPIRED = "expired"
    UNSET = "unset"


def _is_header_safe(value: str) -> bool:
    # Visible ASCII más tabulador, igual que un HeaderValue estricto.
    return all(ch == "\t" or 0x20 <= ord(ch) < 0x7F for ch in value)


@dataclass(frozen=True)
class AuthToken:
    token: str
    state: AuthState = AuthState.VALID
    expires_at: datetime | None = None

    @classmethod
    def from_expiry(
        cls,
        token: str,
        expires_at: datetime | None,
        now: datetime | None = None,
    ) -> "AuthToken":
        """Derive the state from the token expiry reported by Keystone."""

        if not token:
            return cls(token=token, state=AuthState.UNSET, expires_at=expires_at)
        if expires_at is None:
            return cls(token=token, state=AuthState.VALID)
        now = now or datetime.now(timezone.utc)
        state = AuthState.VALID if expires_at > now else AuthState.EXPIRED
        return cls(token=token, state=state, expires_at=expires_at)

    def set_header(self, headers: MutableMapping[str, str]) -> MutableMapping[str, str]:
        if not _is_header_safe(self.token):
            raise AuthHeaderError("Auth token contains characters not allowed in an HTTP header")
        headers[AUTH_TOKEN_HEADER] = self.token
        return headers

    def __repr__(self) -> str:
        return f"AuthToken(token='***', state={self.state.value!r})"


@dataclass(frozen=True)
class NoAuth:
    state: AuthState = AuthState.UNSET

    def set_header(self, headers: MutableMapping[str, str]) -> MutableMapping[str, str]:
        return headers


Auth = Union[AuthToken, NoAuth]
