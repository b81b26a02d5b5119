"""Tests for cookie and header token transport."""

from starlette.requests import Request
from starlette.responses import Response

from modules.auth.transport import (
    ACCESS_TOKEN_MAX_AGE,
    REFRESH_TOKEN_MAX_AGE,
    clear_auth_cookies,
    get_access_token,
    get_refresh_token,
    is_secure_request,
    set_auth_cookies,
)


def make_request(headers: dict[str, str] | None = None, scheme: str = "http") -> Request:
    raw_headers = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    return Request({
        "type": "http",
        "scheme": scheme,
        "method": "GET",
        "path": "/",
        "query_string": b"",
        "headers": raw_headers,
        "server": ("testserver", 80),
    })


def cookie_headers(response: Response) -> dict[str, str]:
    """Map cookie name -> full Set-Cookie header."""
    headers = [v for k, v in response.raw_headers if k == b"set-cookie"]
    return {h.decode().split("=", 1)[0]: h.decode() for h in headers}


class TestMaxAges:
    def test_values(self):
        assert ACCESS_TOKEN_MAX_AGE == 900
        assert REFRESH_TOKEN_MAX_AGE == 30 * 24 * 3600


class TestSetAuthCookies:
    def test_sets_both(self):
        response = Response()
        set_auth_cookies(response, "acc", "ref", secure=False)

        cookies = cookie_headers(response)
        access = cookies["access_token"]
        refresh = cookies["refresh_token"]
        assert access.startswith("access_token=acc;")
        assert "Max-Age=900" in access
        assert refresh.startswith("refresh_token=ref;")
        assert "Max-Age=2592000" in refresh
        for header in (access, refresh):
            assert "HttpOnly" in header
            assert "SameSite=lax" in header
            assert "Path=/" in header
            assert "Secure" not in header

    def test_secure_flag(self):
        response = Response()
        set_auth_cookies(response, "acc", "ref", secure=True)
        for header in cookie_headers(response).values():
            assert "Secure" in header


class TestClearAuthCookies:
    def test_expires_both(self):
        response = Response()
        clear_auth_cookies(response)

        cookies = cookie_headers(response)
        assert set(cookies) == {"access_token", "refresh_token"}
        for name, header in cookies.items():
            assert header.startswith(f'{name}="";') or header.startswith(f"{name}=;")
            assert "Max-Age=0" in header
            assert "01 Jan 1970" in header
            assert "HttpOnly" in header


class TestTokenExtraction:
    def test_access_token_from_cookie(self):
        request = make_request({"cookie": "access_token=from-cookie"})
        assert get_access_token(request) == "from-cookie"

    def test_access_token_from_header(self):
        request = make_request({"authorization": "Bearer from-header"})
        assert get_access_token(request) == "from-header"

    def test_cookie_wins(self):
        request = make_request({
            "cookie": "refresh_token=from-cookie",
            "authorization": "Bearer from-header",
        })
        assert get_refresh_token(request) == "from-cookie"

    def test_non_bearer_header_ignored(self):
        request = make_request({"authorization": "Basic dXNlcjpwdw=="})
        assert get_access_token(request) is None

    def test_empty_bearer(self):
        assert get_refresh_token(make_request({"authorization": "Bearer "})) is None

    def test_nothing(self):
        assert get_refresh_token(make_request()) is None


class TestIsSecureRequest:
    def test_https(self):
        assert is_secure_request(make_request(scheme="https")) is True

    def test_http(self):
        assert is_secure_request(make_request()) is False
