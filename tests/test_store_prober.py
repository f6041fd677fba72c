"""
Tests for liveness probing and homepage fetching.

Uses httpx.MockTransport so no request leaves the process.
"""

import httpx
import pytest

from src.discovery.models import LivenessStatus, StoreRecord
from src.discovery.store_prober import (
    StoreProber,
    build_url_variants,
    extract_text,
    is_acceptable_status,
)


GOLF = StoreRecord("Golf Haus", "https://golfhaus.com", "golfhaus.com")


def make_prober(handler) -> StoreProber:
    return StoreProber(transport=httpx.MockTransport(handler))


def refuse(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


class TestUrlVariants:
    """Test variant construction."""

    def test_order(self):
        assert build_url_variants(GOLF) == [
            "https://golfhaus.com",
            "http://golfhaus.com",
            "https://www.golfhaus.com",
            "http://www.golfhaus.com",
        ]

    def test_url_without_scheme(self):
        store = StoreRecord("Golf Haus", "golfhaus.com", "golfhaus.com")
        assert build_url_variants(store)[0] == "https://golfhaus.com"

    def test_acceptable_status(self):
        assert is_acceptable_status(200)
        assert is_acceptable_status(301)
        assert not is_acceptable_status(404)
        assert not is_acceptable_status(503)


class TestProbe:
    """Test HEAD/GET liveness."""

    @pytest.mark.asyncio
    async def test_head_ok(self):
        async with make_prober(lambda request: httpx.Response(200)) as prober:
            check = await prober.probe(GOLF)
        assert check.status == LivenessStatus.LIVE
        assert check.method == "HEAD"
        assert check.attempts == 1

    @pytest.mark.asyncio
    async def test_head_rejected_get_ok(self):
        def handler(request):
            return httpx.Response(405 if request.method == "HEAD" else 200)

        async with make_prober(handler) as prober:
            check = await prober.probe(GOLF, fast_verify=True)
        assert check.is_live
        assert check.method == "GET"
        assert check.url == "https://golfhaus.com"
        assert check.attempts == 2

    @pytest.mark.asyncio
    async def test_head_redirect_counts_as_live(self):
        def handler(request):
            return httpx.Response(301, headers={"Location": "https://golfhaus.com/home"})

        async with make_prober(handler) as prober:
            check = await prober.probe(GOLF)
        assert check.is_live
        assert check.status_code == 301

    @pytest.mark.asyncio
    async def test_last_variant(self):
        def handler(request):
            if request.url.scheme == "http" and request.url.host == "www.golfhaus.com":
                return httpx.Response(200)
            return refuse(request)

        async with make_prober(handler) as prober:
            check = await prober.probe(GOLF)
        assert check.is_live
        assert check.url == "http://www.golfhaus.com"
        assert check.attempts == 7

    @pytest.mark.asyncio
    async def test_no_answer_is_unknown(self):
        async with make_prober(refuse) as prober:
            check = await prober.probe(GOLF)
            exists = await prober.exists(GOLF)
        assert check.status == LivenessStatus.UNKNOWN
        assert check.attempts == 8
        assert check.error
        assert exists is False

    @pytest.mark.asyncio
    async def test_only_errors_is_dead(self):
        async with make_prober(lambda request: httpx.Response(404)) as prober:
            check = await prober.probe(GOLF)
        assert check.status == LivenessStatus.DEAD
        assert check.status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_url_fails_only_that_variant(self):
        def handler(request):
            if request.url.host == "golfhaus.com":
                raise httpx.InvalidURL("Invalid non-printable ASCII character in URL")
            return httpx.Response(200)

        async with make_prober(handler) as prober:
            check = await prober.probe(GOLF)
        assert check.is_live
        assert check.url == "https://www.golfhaus.com"
        assert check.attempts == 5


class TestFetchHtml:
    """Test homepage fetching."""

    @pytest.mark.asyncio
    async def test_returns_first_text_body(self):
        def handler(request):
            if request.url.host == "golfhaus.com" and request.url.scheme == "https":
                return refuse(request)
            return httpx.Response(
                200,
                text="<html>Simulators from $4,999</html>",
                headers={"Content-Type": "text/html; charset=utf-8"},
            )

        async with make_prober(handler) as prober:
            page = await prober.fetch_html(GOLF)
        assert page.ok
        assert "$4,999" in page.html
        assert page.final_url == "http://golfhaus.com"

    @pytest.mark.asyncio
    async def test_reports_variant_not_redirect_target(self):
        def handler(request):
            if request.url.path != "/shop":
                return httpx.Response(301, headers={"Location": "https://golfhaus.com/shop"})
            return httpx.Response(
                200,
                text="<html>Launch monitors</html>",
                headers={"Content-Type": "text/html"},
            )

        async with make_prober(handler) as prober:
            page = await prober.fetch_html(GOLF)
        assert page.ok
        assert page.final_url == "https://golfhaus.com"

    @pytest.mark.asyncio
    async def test_malformed_url_skipped(self):
        def handler(request):
            if request.url.scheme == "https":
                raise httpx.InvalidURL("Invalid host")
            return httpx.Response(200, text="<html>ok</html>", headers={"Content-Type": "text/html"})

        async with make_prober(handler) as prober:
            page = await prober.fetch_html(GOLF)
        assert page.final_url == "http://golfhaus.com"

    @pytest.mark.asyncio
    async def test_non_text_skipped(self):
        def handler(request):
            return httpx.Response(200, content=b"\x89PNG", headers={"Content-Type": "image/png"})

        async with make_prober(handler) as prober:
            page = await prober.fetch_html(GOLF)
        assert not page.ok
        assert page.final_url is None

    @pytest.mark.asyncio
    async def test_all_failed(self):
        async with make_prober(refuse) as prober:
            page = await prober.fetch_html(GOLF)
        assert page.html is None


class TestExtractText:
    """Test HTML to text."""

    def test_strips_scripts_and_tags(self):
        html = "<html><style>p{}</style><script>alert(1)</script><p>Hello   <b>world</b></p></html>"
        assert extract_text(html) == "Hello world"
