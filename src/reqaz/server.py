"""aiohttp server for reqaz.

Application factory and the catch-all source route.
"""

import asyncio
from hashlib import md5

from aiohttp import web

from reqaz.app_keys import request_log_key, resolver_key
from reqaz.config import Config
from reqaz.core.source import SourceResolver
from reqaz.core.types import Invalid, Valid
from reqaz.request_log import ConsoleRequestLog, NullRequestLog, RequestLog


def create_source_routes() -> list[web.RouteDef]:
    return [
        web.get("/{path:.*}", get_source),
    ]


async def get_source(request: web.Request) -> web.Response:
    resolver = request.app[resolver_key]
    request_log = request.app[request_log_key]
    path = request.path_qs

    loop = asyncio.get_running_loop()
    result = await loop.run_in_executor(None, resolver.resolve, str(request.url))

    match result:
        case Valid(body=body, mime=mime):
            response = _valid_response(request, body, mime)
        case Invalid(status=status):
            response = web.Response(status=status)

    request_log.record(response.status, path)
    return response


def _valid_response(request: web.Request, body: str, mime: str | None) -> web.Response:
    etag = _compute_etag(body)
    headers = {
        "ETag": etag,
        "Cache-Control": "no-cache",
    }

    if request.headers.get("If-None-Match") == etag:
        return web.Response(status=304, headers=headers)

    response = web.Response(body=body.encode("utf-8"), headers=headers)
    if mime is not None:
        response.content_type = mime
        if mime.startswith("text/"):
            response.charset = "utf-8"
    return response


def _compute_etag(content: str) -> str:
    # First 16 hex chars (64 bits) are enough for conditional GET
    content_hash = md5(content.encode("utf-8"), usedforsecurity=False).hexdigest()[:16]
    return f'"{content_hash}"'


def create_app(config: Config, *, request_log: RequestLog | None = None) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        request_log: Request log to report to; defaults to the console
                     when config.log.enabled, otherwise to nothing

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    if request_log is None:
        request_log = ConsoleRequestLog() if config.log.enabled else NullRequestLog()

    app[resolver_key] = SourceResolver(
        config.content.root,
        max_include_depth=config.content.max_include_depth,
    )
    app[request_log_key] = request_log

    app.router.add_routes(create_source_routes())

    return app


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    web.run_app(
        app,
        host=config.server.host,
        port=config.server.port,
        print=None,
    )
