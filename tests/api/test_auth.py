"""
Tests for auth header injection.
"""

from datetime import datetime, timedelta, timezone

import httpx
import pytest

from core.api.auth import AuthState, AuthToken, NoAuth
from core.api.compute import GetServer
from core.api.query import raw_query
from core.errors import AuthHeaderError

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


class TestNoAuth:
    def test_headers_are_untouched(self):
        headers = {"Accept": "application/json"}
        assert NoAuth().set_header(headers) == {"Accept": "application/json"}
        assert NoAuth().state is AuthState.UNSET

    async def test_request_has_no_token(self, fake_session):
        session = fake_session(lambda request: httpx.Response(200, json={"server": {"id": "s"}}))
        await raw_query(GetServer.build(id="s"), session)
        assert "X-Auth-Token" not in session.requests[0].headers


class TestAuthToken:
    def test_sets_token_header(self):
        assert AuthToken("abc").set_header({}) == {"X-Auth-Token": "abc"}

    async def test_token_reaches_outgoing_request(self, fake_session):
        session = fake_session(lambda request: httpx.Response(200, json={"server": {"id": "s"}}), auth=AuthToken("abc"))
        await raw_query(GetServer.build(id="s"), session)
        assert session.requests[0].headers["X-Auth-Token"] == "abc"

    @pytest.mark.parametrize("token", ["abc\n", "to\x00ken", "tökén"])
    def test_rejects_non_header_characters(self, token):
        with pytest.raises(AuthHeaderError):
            AuthToken(token).set_header({})

    def test_tab_is_allowed(self):
        assert AuthToken("a\tb").set_header({})["X-Auth-Token"] == "a\tb"

    def test_repr_masks_token(self):
        assert "abc" not in repr(AuthToken("abc"))


class TestAuthTokenFromExpiry:
    def test_future_expiry_is_valid(self):
        auth = AuthToken.from_expiry("abc", NOW + timedelta(hours=1), now=NOW)
        assert auth.state is AuthState.VALID

    def test_past_expiry_is_expired(self):
        auth = AuthToken.from_expiry("abc", NOW - timedelta(seconds=1), now=NOW)
        assert auth.state is AuthState.EXPIRED

    def test_no_expiry_is_valid(self):
        assert AuthToken.from_expiry("abc", None).state is AuthState.VALID

    def test_empty_token_is_unset(self):
        assert AuthToken.from_expiry("", NOW).state is AuthState.UNSET
