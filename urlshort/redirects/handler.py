"""Compose redirect lookups into ASGI request handlers."""

from typing import Dict, Mapping

import structlog
from starlette.responses import RedirectResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from .builder import build_map
from .parser import RawDocument, parse_json, parse_yaml

logger = structlog.get_logger(__name__)


def map_handler(path_map: Mapping[str, str], fallback: ASGIApp) -> ASGIApp:
    """Return an ASGI app that redirects mapped paths.
    
    Any HTTP request whose path is a key of ``path_map`` gets a 302 Found
    response pointing at the mapped URL, whatever the method. Every other
    request, and every non-HTTP scope, is passed to ``fallback`` untouched.
    """
    paths_to_urls: Dict[str, str] = dict(path_map)
    
    async def handler(scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            path = scope["path"]
            dest = paths_to_urls.get(path)
            if dest is not None:
                logger.info("Redirect matched", path=path, location=dest, method=scope["method"])
                response = RedirectResponse(dest, status_code=302)
                await response(scope, receive, send)
                return
        
        await fallback(scope, receive, send)
    
    return handler


def yaml_handler(data: RawDocument, fallback: ASGIApp) -> ASGIApp:
    """Parse YAML redirect rules and wrap them as a handler.
    
    Raises:
        DecodeError: if the document is not a valid list of path/url records.
    """
    rules = parse_yaml(data)
    return map_handler(build_map(rules), fallback)


def json_handler(data: RawDocument, fallback: ASGIApp) -> ASGIApp:
    """Parse JSON redirect rules and wrap them as a handler.
    
    Raises:
        DecodeError: if the document is not a valid array of path/url objects.
    """
    rules = parse_json(data)
    return map_handler(build_map(rules), fallback)
