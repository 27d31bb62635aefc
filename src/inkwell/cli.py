"""CLI for inkwell - Markdown to blocks, table of contents and HTML."""

import argparse
import json
import platform
import sys
from pathlib import Path
from typing import Any

import structlog

from . import __version__
from .core.model import to_dict
from .errors import InkwellError
from .runtime import Runtime, build_runtime, setup_logging

log = structlog.get_logger()


def _read_source(path: str) -> str | None:
    """Read Markdown from a file, or stdin for "-"."""
    if path == "-":
        return sys.stdin.read()
    p = Path(path)
    if not p.is_file():
        print(f"Error: file not found: {path}", file=sys.stderr)
        return None
    try:
        return p.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        print(f"Error: {path} is not valid UTF-8 ({e.reason} at byte {e.start})", file=sys.stderr)
        return None


def cmd_render(args: argparse.Namespace, rt: Runtime) -> int:
    """Print block nodes as JSON, or the HTML rendering."""
    text = _read_source(args.source)
    if text is None:
        return 1

    blocks = rt.parser.parse(text)
    if args.format == "html":
        print(rt.renderer.render_html(blocks))
    else:
        print(json.dumps([to_dict(b) for b in blocks], indent=2, ensure_ascii=False))
    return 0


def cmd_toc(args: argparse.Namespace, rt: Runtime) -> int:
    """Print the table of contents."""
    text = _read_source(args.source)
    if text is None:
        return 1

    headings = rt.extractor.extract(text)
    if args.json:
        print(json.dumps([to_dict(h) for h in headings], indent=2, ensure_ascii=False))
        return 0

    for h in headings:
        indent = "  " * (h.level - 1)
        print(f"{indent}- {h.text} (#{h.id})")
    return 0


def cmd_preview(args: argparse.Namespace, rt: Runtime) -> int:
    """Print metadata, summary, headings and HTML as one JSON document."""
    text = _read_source(args.source)
    if text is None:
        return 1

    preview = rt.preview(text)
    if not args.blocks:
        preview.pop("blocks")
    # default=str covers YAML dates in the metadata block
    print(json.dumps(preview, indent=2, ensure_ascii=False, default=str))
    return 0


def cmd_serve(args: argparse.Namespace, rt: Runtime) -> int:
    """Start the local JSON API server."""
    import uvicorn

    from .api.app import create_app, generate_token

    api = rt.config.api
    host = args.host or api.host
    port = args.port if args.port is not None else api.port

    token: str | None = api.token or None
    if args.no_auth:
        token = None
    elif args.token:
        token = args.token
    elif args.gen_token:
        token = generate_token()
        print(f"Generated token: {token}", file=sys.stderr)

    app = create_app(rt, token=token, enable_cors=args.cors or api.cors)

    if not args.quiet:
        print(f"Starting server on http://{host}:{port}", file=sys.stderr)
        if token:
            print("Authentication: enabled (Bearer token required)", file=sys.stderr)
        else:
            print("Authentication: disabled", file=sys.stderr)

    log.info("server_starting", host=host, port=port, auth=token is not None)
    uvicorn.run(app, host=host, port=port, log_config=None)
    return 0


def cmd_watch(args: argparse.Namespace, rt: Runtime) -> int:
    """Re-render an HTML preview whenever the source changes."""
    from .watch import watch_file

    source = Path(args.source)
    out = Path(args.out) if args.out else source.with_suffix(".html")
    debounce = args.debounce if args.debounce is not None else rt.config.watch.debounce_ms

    return watch_file(
        source,
        out,
        rt,
        debounce_ms=debounce,
        quiet=args.quiet,
        json_output=args.json,
    )


def version_text() -> str:
    return (
        f"inkwell {__version__}\n"
        f"python {platform.python_version()}\n"
        f"platform {platform.system().lower()}-{platform.machine()}"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inkwell", description="Markdown to blocks, table of contents and HTML"
    )
    parser.add_argument(
        "--version", action="version", version=version_text()
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: cwd/inkwell.toml)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Minimize output"
    )

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    # render command
    parser_render = subparsers.add_parser("render", help="Parse Markdown into block nodes")
    parser_render.add_argument("source", help="Markdown file, or - for stdin")
    parser_render.add_argument(
        "--format", choices=["json", "html"], default="json",
        help="Output format (default: json)",
    )

    # toc command
    parser_toc = subparsers.add_parser("toc", help="Print the table of contents")
    parser_toc.add_argument("source", help="Markdown file, or - for stdin")
    parser_toc.add_argument("--json", action="store_true", help="Machine-readable output")

    # preview command
    parser_preview = subparsers.add_parser(
        "preview", help="Metadata, reading time, excerpt, TOC and HTML as JSON"
    )
    parser_preview.add_argument("source", help="Markdown file, or - for stdin")
    parser_preview.add_argument(
        "--blocks", action="store_true", help="Include block nodes in the output"
    )

    # serve command
    parser_serve = subparsers.add_parser("serve", help="Start local JSON API server")
    parser_serve.add_argument("--host", default=None, help="Host to bind (default: from config)")
    parser_serve.add_argument("--port", type=int, default=None, help="Port (default: from config)")
    parser_serve.add_argument("--token", help="Bearer token for authentication")
    parser_serve.add_argument(
        "--gen-token", dest="gen_token", action="store_true",
        help="Generate and print a random token",
    )
    parser_serve.add_argument(
        "--no-auth", dest="no_auth", action="store_true",
        help="Disable authentication even if a token is configured",
    )
    parser_serve.add_argument("--cors", action="store_true", help="Enable CORS")

    # watch command
    parser_watch = subparsers.add_parser("watch", help="Live HTML preview of a Markdown file")
    parser_watch.add_argument("source", help="Markdown file to watch")
    parser_watch.add_argument("--out", help="HTML output path (default: <source>.html)")
    parser_watch.add_argument(
        "--debounce", type=int, default=None, help="Debounce window in ms (default: from config)"
    )
    parser_watch.add_argument("--json", action="store_true", help="Print JSON events")

    return parser


COMMANDS: dict[str, Any] = {
    "render": cmd_render,
    "toc": cmd_toc,
    "preview": cmd_preview,
    "serve": cmd_serve,
    "watch": cmd_watch,
}


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        rt = build_runtime(config_path=args.config)
    except InkwellError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(rt.config)
    sys.exit(COMMANDS[args.cmd](args, rt))


if __name__ == "__main__":
    main()
