import argparse
import json
import logging
import sys

import uvicorn

from src.api.deps import ConfigError, get_settings, parse_port, site_config_for
from src.components.render import create_render_service

logger = logging.getLogger("cli")


def port_arg(raw: str) -> int:
    try:
        return parse_port(raw)
    except ConfigError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def handle_serve(args: argparse.Namespace) -> None:
    settings = get_settings()
    host = args.host or settings.host
    port = args.port or settings.port

    logger.info(f"Serving on http://{host}:{port}")
    uvicorn.run(
        "src.api.main:app",
        host=host,
        port=port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


def handle_meta(args: argparse.Namespace) -> None:
    settings = get_settings()
    base_url = args.base_url or settings.base_url or f"http://localhost:{settings.port}"
    service = create_render_service(site_config_for(settings.site_config_path), base_url)

    route = service.resolve_route(args.path)
    metadata = service.build_route_metadata(route)
    print(json.dumps({"route": route.kind.value, **metadata.to_dict()}, indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Social preview SSR server")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Serve
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP server")
    serve_parser.add_argument("--host", help="Bind address (default: HOST or 0.0.0.0)")
    serve_parser.add_argument("--port", type=port_arg, help="Port (default: PORT or 3000)")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve_parser.set_defaults(func=handle_serve)

    # Meta
    meta_parser = subparsers.add_parser("meta", help="Print the metadata computed for a path")
    meta_parser.add_argument("path", help="Request path, e.g. /post/123")
    meta_parser.add_argument("--base-url", help="Base URL for canonical and image URLs")
    meta_parser.set_defaults(func=handle_meta)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        level = get_settings().log_level
    except ConfigError as e:
        logging.basicConfig(level=logging.INFO)
        logger.error(str(e))
        sys.exit(2)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        args.func(args)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
