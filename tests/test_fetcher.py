"""Tests for the CSS fetcher against a local aiohttp server."""

import asyncio

import aiohttp
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from iconfont_updater.download import CSSFetcher
from iconfont_updater.exceptions import (
    DownloadError,
    DownloadTimeoutError,
    EmptyContentError,
    FetchError,
    TooManyRedirectsError,
    TransportError,
)

CSS = ".icon-home:before { content: \"\\e600\"; }\n"


def make_app(**routes) -> web.Application:
    app = web.Application()
    for name, handler in routes.items():
        app.router.add_get(f"/{name.replace('_', '.')}", handler)
    return app


async def final_css(request: web.Request) -> web.Response:
    return web.Response(text="redirected content", content_type="text/css")


class TestFetchSuccess:
    @pytest.mark.asyncio
    async def test_returns_body(self):
        async def handler(request):
            return web.Response(text=CSS, content_type="text/css")

        async with TestServer(make_app(font_css=handler)) as server:
            async with CSSFetcher(timeout_ms=5000) as fetcher:
                content = await fetcher.fetch(str(server.make_url("/font.css")))

        assert content == CSS

    @pytest.mark.asyncio
    async def test_decodes_utf8_body(self):
        async def handler(request):
            return web.Response(
                body="/* 图标 */ .a{}".encode("utf-8"), content_type="text/css"
            )

        async with TestServer(make_app(font_css=handler)) as server:
            async with CSSFetcher(timeout_ms=5000) as fetcher:
                content = await fetcher.fetch(str(server.make_url("/font.css")))

        assert content == "/* 图标 */ .a{}"

    @pytest.mark.asyncio
    async def test_uses_injected_session_without_closing_it(self):
        async def handler(request):
            return web.Response(text=CSS)

        async with TestServer(make_app(font_css=handler)) as server:
            async with aiohttp.ClientSession() as session:
                async with CSSFetcher(session=session) as fetcher:
                    await fetcher.fetch(str(server.make_url("/font.css")))
                assert not session.closed


class TestRedirects:
    @pytest.mark.asyncio
    async def test_follows_absolute_redirect(self):
        async def start(request):
            location = str(request.url.with_path("/final.css"))
            return web.Response(status=302, headers={"Location": location})

        async with TestServer(make_app(start_css=start, final_css=final_css)) as server:
            async with CSSFetcher(timeout_ms=5000) as fetcher:
                content = await fetcher.fetch(str(server.make_url("/start.css")))

        assert content == "redirected content"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [301, 302, 307, 308])
    async def test_follows_relative_redirect(self, status):
        async def start(request):
            return web.Response(status=status, headers={"Location": "final.css"})

        async with TestServer(make_app(start_css=start, final_css=final_css)) as server:
            async with CSSFetcher(timeout_ms=5000) as fetcher:
                content = await fetcher.fetch(str(server.make_url("/start.css")))

        assert content == "redirected content"

    @pytest.mark.asyncio
    async def test_redirect_without_location_is_download_error(self):
        async def start(request):
            return web.Response(status=302)

        async with TestServer(make_app(start_css=start)) as server:
            async with CSSFetcher(timeout_ms=5000) as fetcher:
                with pytest.raises(DownloadError) as exc_info:
                    await fetcher.fetch(str(server.make_url("/start.css")))

        assert exc_info.value.status_code == 302

    @pytest.mark.asyncio
    async def test_redirect_loop_hits_cap(self):
        hits = []

        async def loop(request):
            hits.append(request.path)
            return web.Response(status=302, headers={"Location": "/loop.css"})

        async with TestServer(make_app(loop_css=loop)) as server:
            async with CSSFetcher(timeout_ms=5000, max_redirects=3) as fetcher:
                with pytest.raises(TooManyRedirectsError):
                    await fetcher.fetch(str(server.make_url("/loop.css")))

        # initial request plus three followed redirects
        assert len(hits) == 4

    @pytest.mark.asyncio
    async def test_zero_redirects_allowed(self):
        async def start(request):
            return web.Response(status=301, headers={"Location": "/final.css"})

        async with TestServer(make_app(start_css=start, final_css=final_css)) as server:
            async with CSSFetcher(max_redirects=0) as fetcher:
                with pytest.raises(TooManyRedirectsError):
                    await fetcher.fetch(str(server.make_url("/start.css")))

    @pytest.mark.asyncio
    async def test_malformed_location_is_download_error(self):
        async def start(request):
            return web.Response(
                status=302, headers={"Location": "http://[bad/final.css"}
            )

        async with TestServer(make_app(start_css=start)) as server:
            async with CSSFetcher(timeout_ms=5000) as fetcher:
                with pytest.raises(DownloadError) as exc_info:
                    await fetcher.fetch(str(server.make_url("/start.css")))

        error = exc_info.value
        assert isinstance(error, FetchError)
        assert error.status_code == 302
        assert error.context["location"] == "http://[bad/final.css"


class TestFetchFailures:
    @pytest.mark.asyncio
    async def test_not_found_carries_status(self):
        async with TestServer(make_app()) as server:
            url = str(server.make_url("/missing.css"))
            async with CSSFetcher(timeout_ms=5000) as fetcher:
                with pytest.raises(DownloadError) as exc_info:
                    await fetcher.fetch(url)

        error = exc_info.value
        assert error.status_code == 404
        assert error.url == url
        assert "404" in str(error)

    @pytest.mark.asyncio
    async def test_server_error(self):
        async def broken(request):
            return web.Response(status=500, text="boom")

        async with TestServer(make_app(font_css=broken)) as server:
            async with CSSFetcher(timeout_ms=5000) as fetcher:
                with pytest.raises(DownloadError) as exc_info:
                    await fetcher.fetch(str(server.make_url("/font.css")))

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_empty_body(self):
        async def empty(request):
            return web.Response(text="")

        async with TestServer(make_app(font_css=empty)) as server:
            async with CSSFetcher(timeout_ms=5000) as fetcher:
                with pytest.raises(EmptyContentError):
                    await fetcher.fetch(str(server.make_url("/font.css")))

    @pytest.mark.asyncio
    async def test_slow_response_times_out(self):
        async def slow(request):
            await asyncio.sleep(0.5)
            return web.Response(text=CSS)

        async with TestServer(make_app(font_css=slow)) as server:
            async with CSSFetcher(timeout_ms=50) as fetcher:
                with pytest.raises(DownloadTimeoutError) as exc_info:
                    await fetcher.fetch(str(server.make_url("/font.css")))

        assert exc_info.value.timeout_ms == 50

    @pytest.mark.asyncio
    async def test_timeout_window_restarts_per_hop(self):
        async def start(request):
            await asyncio.sleep(0.2)
            return web.Response(status=302, headers={"Location": "/final.css"})

        async def final(request):
            await asyncio.sleep(0.2)
            return web.Response(text="redirected content")

        async with TestServer(make_app(start_css=start, final_css=final)) as server:
            async with CSSFetcher(timeout_ms=350) as fetcher:
                content = await fetcher.fetch(str(server.make_url("/start.css")))

        assert content == "redirected content"

    @pytest.mark.asyncio
    async def test_connection_refused_is_transport_error(self):
        server = TestServer(make_app())
        await server.start_server()
        url = str(server.make_url("/font.css"))
        await server.close()

        async with CSSFetcher(timeout_ms=5000) as fetcher:
            with pytest.raises(TransportError) as exc_info:
                await fetcher.fetch(url)

        assert isinstance(exc_info.value, FetchError)
        assert exc_info.value.code == "E304"
