"""
ig_gallery CLI — Command-line Interface
========================================

Usage:
    python -m ig_gallery parse ads.tsv
    python -m ig_gallery resolve ads.tsv --json -o items.json
    python -m ig_gallery resolve ads.tsv --partial --concurrency 4
    python -m ig_gallery resolve --sample
    python -m ig_gallery serve --port 8877
"""

import argparse
import asyncio
import json
import sys

from .config import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_TABLE
from .utils import format_count


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ig_gallery",
        description="Instagram video gallery resolver",
    )
    parser.add_argument("--env", default=".env", help="Path to .env file (default: .env)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # ─── parse ─────────────────────────────────────
    p_parse = subparsers.add_parser("parse", help="Parse a table into rows")
    p_parse.add_argument("file", nargs="?", default="-", help="Table file ('-' = stdin)")
    p_parse.add_argument("--json", action="store_true", dest="as_json", help="Output as JSON")

    # ─── resolve ───────────────────────────────────
    p_resolve = subparsers.add_parser("resolve", help="Parse and resolve a table")
    p_resolve.add_argument("file", nargs="?", default=None, help="Table file ('-' = stdin, default: built-in sample table)")
    p_resolve.add_argument("--sample", action="store_true", help="Use sample media (no network)")
    p_resolve.add_argument("--partial", action="store_true", help="Report per-row errors instead of failing")
    p_resolve.add_argument("-c", "--concurrency", type=int, default=1, help="Rows resolved at once (default: 1)")
    p_resolve.add_argument("--json", action="store_true", dest="as_json", help="Output as JSON")
    p_resolve.add_argument("-o", "--output", default=None, help="Write JSON to file")

    # ─── serve ─────────────────────────────────────
    p_serve = subparsers.add_parser("serve", help="Run the resolution service")
    p_serve.add_argument("--host", default=DEFAULT_HOST, help=f"Host (default: {DEFAULT_HOST})")
    p_serve.add_argument("--port", type=int, default=DEFAULT_PORT, help=f"Port (default: {DEFAULT_PORT})")
    p_serve.add_argument("--sample", action="store_true", help="Use sample media (no network)")

    return parser


def read_table(path) -> str:
    """Table text from a file, stdin ('-') or the built-in sample (None)."""
    if path is None:
        return DEFAULT_TABLE
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def get_gallery(args, sample: bool = False, concurrency: int = 1):
    """Initialize Gallery."""
    from .gallery import Gallery
    if sample:
        return Gallery.sample(concurrency=concurrency, debug=args.debug)
    return Gallery.from_env(args.env, concurrency=concurrency, debug=args.debug)


def pp_rows(rows) -> None:
    for i, row in enumerate(rows):
        print(f"  {i:>3}  {row.name or '-':<24} results={format_count(row.results):<6} "
              f"cpr={format_count(row.cpr):<6} {row.link or '-'}")


def pp_items(items) -> None:
    for item in items:
        kind = "🎬" if item.is_video else "🖼 "
        print(f"  {kind} {item.label or 'Post':<24} {format_count(item.stats.results)} results "
              f"· CPR {format_count(item.stats.cpr)}  {item.permalink}")


def pp_results(results) -> None:
    for r in results:
        if r.ok:
            pp_items([r.item])
        else:
            print(f"  ❌ row {r.index} {r.row.link or '-'}: {r.error}")


async def _resolve(args):
    gallery = get_gallery(args, sample=args.sample, concurrency=args.concurrency)
    async with gallery:
        return await gallery.load(read_table(args.file), partial=args.partial)


def main(argv=None):
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    try:
        if args.command == "parse":
            from .parser import parse_table
            rows = parse_table(read_table(args.file))
            if args.as_json:
                print(json.dumps([r.to_json() for r in rows], indent=2, ensure_ascii=False))
            else:
                print(f"\n📄 {len(rows)} row(s)")
                pp_rows(rows)

        elif args.command == "resolve":
            out = asyncio.run(_resolve(args))
            data = [o.to_json() for o in out]
            if args.output:
                with open(args.output, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                print(f"\n📥 {len(data)} item(s) → {args.output}")
            elif args.as_json:
                print(json.dumps(data, indent=2, ensure_ascii=False))
            else:
                print(f"\n🎞  {len(out)} item(s)")
                if args.partial:
                    pp_results(out)
                else:
                    pp_items(out)

        elif args.command == "serve":
            import uvicorn
            from .server import create_app
            factory = (lambda: get_gallery(args, sample=True)) if args.sample else (lambda: get_gallery(args))
            uvicorn.run(create_app(gallery_factory=factory), host=args.host, port=args.port, log_level="info")

    except Exception as e:
        print(f"\n❌ Error: {e}", file=sys.stderr)
        if args.debug:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
