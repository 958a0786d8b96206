"""Application keys for type-safe app configuration access."""

from aiohttp import web

from reqaz.core.source import SourceResolver
from reqaz.request_log import RequestLog

resolver_key = web.AppKey("resolver", SourceResolver)
request_log_key = web.AppKey("request_log", RequestLog)
