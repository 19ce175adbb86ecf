"""
Shared fixtures - a local aiohttp application that answers HEAD probes
"""

import asyncio
from collections import defaultdict

import aiohttp
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer


class LinkServer:
    """Running test server plus per-path hit counters"""

    def __init__(self, server: TestServer, hits):
        self.server = server
        self.hits = hits

    def url(self, path: str) -> str:
        return str(self.server.make_url(path))


def build_app(hits) -> web.Application:
    def counted(handler):
        async def wrapper(request):
            hits[request.path] += 1
            hits[(request.method, request.path)] += 1
            return await handler(request)
        return wrapper

    async def ok(request):
        return web.Response(status=200)

    async def moved(request):
        return web.Response(status=301, headers={'Location': '/new'})

    async def moved_absolute(request):
        return web.Response(status=308, headers={'Location': 'https://other.example.com/x'})

    async def moved_scheme_relative(request):
        return web.Response(status=301, headers={'Location': '//cdn.example.org/lib'})

    async def found(request):
        return web.Response(status=302, headers={'Location': '/elsewhere'})

    async def temporary(request):
        return web.Response(status=307, headers={'Location': '/elsewhere'})

    async def no_location(request):
        return web.Response(status=301)

    async def see_other(request):
        return web.Response(status=303, headers={'Location': '/ok'})

    async def missing(request):
        return web.Response(status=404)

    async def broken(request):
        return web.Response(status=500)

    async def limited(request):
        return web.Response(status=429, headers={'Retry-After': '5'})

    async def flaky(request):
        # 429 on the first request, 200 afterwards
        if hits['/flaky'] == 1:
            return web.Response(status=429, headers={'Retry-After': '1'})
        return web.Response(status=200)

    async def slow(request):
        await asyncio.sleep(0.5)
        return web.Response(status=200)

    app = web.Application()
    routes = {
        '/ok': ok,
        '/new': ok,
        '/old': moved,
        '/absolute': moved_absolute,
        '/scheme-relative': moved_scheme_relative,
        '/found': found,
        '/temporary': temporary,
        '/no-location': no_location,
        '/see-other': see_other,
        '/missing': missing,
        '/broken': broken,
        '/limited': limited,
        '/flaky': flaky,
        '/slow': slow,
    }
    for path, handler in routes.items():
        app.router.add_get(path, counted(handler))
    return app


@pytest_asyncio.fixture
async def link_server():
    hits = defaultdict(int)
    server = TestServer(build_app(hits), host='127.0.0.1')
    await server.start_server()
    try:
        yield LinkServer(server, hits)
    finally:
        await server.close()


@pytest_asyncio.fixture
async def session():
    async with aiohttp.ClientSession() as client_session:
        yield client_session
