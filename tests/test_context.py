"""Tests for waypoint.context — RequestContext and the ambient ContextVars."""

import pytest

from waypoint.context import (
    RequestContext,
    context_var,
    get_context,
    get_current_match,
    match_var,
)
from waypoint.errors import ConfigurationError
from waypoint.http.request import Request
from waypoint.routing.route import Route, RouteMatch


class TestRequestContext:
    def test_defaults(self) -> None:
        ctx = RequestContext()
        assert ctx.host == "localhost"
        assert ctx.scheme == "http"
        assert ctx.port is None

    def test_scheme_and_http_host(self) -> None:
        ctx = RequestContext(host="shop.test", scheme="https")
        assert ctx.http_host == "shop.test"
        assert ctx.scheme_and_http_host == "https://shop.test"

    def test_default_port_omitted(self) -> None:
        assert RequestContext(host="a.test", scheme="https", port=443).http_host == "a.test"
        assert RequestContext(host="a.test", scheme="http", port=80).http_host == "a.test"

    def test_non_default_port_kept(self) -> None:
        ctx = RequestContext(host="a.test", scheme="https", port=80)
        assert ctx.scheme_and_http_host == "https://a.test:80"

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            RequestContext().host = "x"  # type: ignore[misc]


class TestFromUrl:
    def test_basic(self) -> None:
        ctx = RequestContext.from_url("https://shop.test")
        assert ctx == RequestContext(host="shop.test", scheme="https", port=None)

    def test_with_port(self) -> None:
        ctx = RequestContext.from_url("http://shop.test:8000/ignored/path")
        assert ctx.scheme_and_http_host == "http://shop.test:8000"

    def test_host_lowercased(self) -> None:
        assert RequestContext.from_url("HTTPS://Shop.Test").host == "shop.test"

    def test_missing_scheme(self) -> None:
        with pytest.raises(ConfigurationError, match="scheme and host"):
            RequestContext.from_url("shop.test")

    def test_invalid_port(self) -> None:
        with pytest.raises(ConfigurationError, match="invalid port"):
            RequestContext.from_url("http://shop.test:notaport")


class TestFromRequest:
    def test_copies_address(self) -> None:
        request = Request(
            method="GET",
            path="/",
            scheme="https",
            host="shop.test",
            port=8443,
        )
        ctx = RequestContext.from_request(request)
        assert ctx == RequestContext(host="shop.test", scheme="https", port=8443)

    def test_server_fallback(self) -> None:
        scope = {"type": "http", "method": "GET", "path": "/", "server": ["10.0.0.1", 8080]}
        ctx = RequestContext.from_scope(scope)
        assert ctx.scheme_and_http_host == "http://10.0.0.1:8080"

    def test_no_host_at_all(self) -> None:
        assert RequestContext.from_request(Request(method="GET", path="/")).host == "localhost"

    def test_from_scope(self) -> None:
        scope = {
            "type": "http",
            "method": "GET",
            "path": "/",
            "scheme": "https",
            "headers": [(b"host", b"shop.test")],
        }
        assert RequestContext.from_scope(scope).scheme_and_http_host == "https://shop.test"


class TestFromEnviron:
    def test_http_host(self) -> None:
        ctx = RequestContext.from_environ({"HTTP_HOST": "shop.test:8080", "HTTPS": "on"})
        assert ctx == RequestContext(host="shop.test", scheme="https", port=8080)

    def test_server_name_fallback(self) -> None:
        ctx = RequestContext.from_environ({"SERVER_NAME": "Internal", "SERVER_PORT": "80"})
        assert ctx.scheme_and_http_host == "http://internal"

    def test_request_scheme(self) -> None:
        ctx = RequestContext.from_environ({"REQUEST_SCHEME": "HTTPS", "HTTP_HOST": "a.test"})
        assert ctx.scheme == "https"

    def test_wsgi_url_scheme(self) -> None:
        ctx = RequestContext.from_environ({"wsgi.url_scheme": "https", "HTTP_HOST": "a.test"})
        assert ctx.scheme == "https"

    def test_empty(self) -> None:
        assert RequestContext.from_environ({}) == RequestContext()

    def test_os_environ_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for key in ("REQUEST_SCHEME", "wsgi.url_scheme", "HTTPS", "SERVER_NAME", "SERVER_PORT"):
            monkeypatch.delenv(key, raising=False)
        monkeypatch.setenv("HTTP_HOST", "cli.test")
        assert RequestContext.from_environ().scheme_and_http_host == "http://cli.test"


class TestContextVars:
    def test_get_context_raises_outside_request(self) -> None:
        with pytest.raises(LookupError):
            get_context()

    def test_set_and_get_context(self) -> None:
        ctx = RequestContext(host="shop.test")
        token = context_var.set(ctx)
        try:
            assert get_context() is ctx
        finally:
            context_var.reset(token)

    def test_get_current_match_raises_outside_request(self) -> None:
        with pytest.raises(LookupError):
            get_current_match()

    def test_set_and_get_current_match(self) -> None:
        match = RouteMatch(route=Route("x", "/x"), path_params={})
        token = match_var.set(match)
        try:
            assert get_current_match() is match
        finally:
            match_var.reset(token)
