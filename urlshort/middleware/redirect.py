"""Redirect middleware that serves configured paths before routing."""

from typing import Mapping

from starlette.types import ASGIApp, Receive, Scope, Send

from urlshort.redirects.handler import map_handler


class RedirectMiddleware:
    """ASGI middleware redirecting mapped paths and delegating the rest."""
    
    def __init__(self, app: ASGIApp, path_map: Mapping[str, str]):
        self.app = app
        self.path_map = dict(path_map)
        self.handler = map_handler(self.path_map, app)
    
    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.handler(scope, receive, send)
