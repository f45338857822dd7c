#!/usr/bin/env python3
"""Command-line interface for the urlshort redirect service."""

import argparse
import os
import sys
import structlog

from .config.logging import configure_logging
from .config.settings import get_settings
from .exceptions import DecodeError, RedirectConfigNotFound
from .redirects import build_map, load_path_rules

logger = structlog.get_logger(__name__)


def run_serve(host: str, port: int, config_path: str = None, reload: bool = False) -> None:
    """Run the redirect service under uvicorn."""
    import uvicorn
    
    if config_path:
        # Read by the app's settings when uvicorn imports it
        os.environ["REDIRECTS_FILE"] = config_path
        get_settings.cache_clear()
    
    settings = get_settings()
    uvicorn.run(
        "urlshort.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower()
    )


def run_check(config_path: str) -> None:
    """Validate a rules file and print the resolved redirects."""
    try:
        rules = load_path_rules(config_path)
    except (DecodeError, RedirectConfigNotFound) as exc:
        logger.error("Invalid redirect rules", **exc.to_dict())
        sys.exit(1)
    
    path_map = build_map(rules)
    for path, url in path_map.items():
        print(f"{path} -> {url}")
    
    logger.info("Redirect rules valid", rules=len(rules), paths=len(path_map))
    sys.exit(0)


def run_lookup(config_path: str, path: str) -> None:
    """Print the redirect target for a single path."""
    try:
        rules = load_path_rules(config_path)
    except (DecodeError, RedirectConfigNotFound) as exc:
        logger.error("Invalid redirect rules", **exc.to_dict())
        sys.exit(1)
    
    dest = build_map(rules).get(path)
    if dest is None:
        logger.warning("No redirect for path", path=path)
        sys.exit(1)
    
    print(dest)
    sys.exit(0)


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Path to URL redirect service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Serve redirects from a rules file
  python -m urlshort.cli serve --config config/redirects.yaml --port 8080
  
  # Validate a rules file
  python -m urlshort.cli check config/redirects.yaml
  
  # Show where a path redirects to
  python -m urlshort.cli lookup config/redirects.yaml /some-path
        """
    )
    
    subparsers = parser.add_subparsers(dest="command", help="Command to run")
    
    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the redirect server")
    serve_parser.add_argument("--host", default=None, help="Bind address (defaults to HOST setting)")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port (defaults to PORT setting)")
    serve_parser.add_argument("--config", default=None, help="Redirect rules file (YAML or JSON)")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    
    # Check command
    check_parser = subparsers.add_parser("check", help="Validate a redirect rules file")
    check_parser.add_argument("path", help="Path to YAML or JSON rules file")
    
    # Lookup command
    lookup_parser = subparsers.add_parser("lookup", help="Resolve one request path")
    lookup_parser.add_argument("path", help="Path to YAML or JSON rules file")
    lookup_parser.add_argument("request_path", help="Request path, e.g. /some-path")
    
    # Global options
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Log level")
    
    args = parser.parse_args(argv)
    
    if not args.command:
        parser.print_help()
        sys.exit(1)
    
    configure_logging(args.log_level, "console")
    
    try:
        if args.command == "serve":
            run_serve(args.host, args.port, args.config, args.reload)
        elif args.command == "check":
            run_check(args.path)
        elif args.command == "lookup":
            run_lookup(args.path, args.request_path)
        else:
            logger.error("Unknown command", command=args.command)
            sys.exit(1)
    
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(0)


if __name__ == "__main__":
    main()
