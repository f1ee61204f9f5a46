"""Command line entry point: render a document or print its heading outline."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from docweave.config import DOCWEAVE_LOG_LEVEL
from docweave.exceptions import DocweaveError
from docweave.headings import count_headings, extract_heading_hierarchy, format_heading_outline
from docweave.markdown import DocumentRenderer

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="docweave", description="Render Markdown documentation.")
    subcommands = parser.add_subparsers(dest="command", required=True)

    render = subcommands.add_parser("render", help="Render a Markdown file to HTML")
    render.add_argument("file", type=Path)
    render.add_argument(
        "--external",
        action="store_true",
        help="Skip frontmatter schema validation",
    )

    outline = subcommands.add_parser("outline", help="Print the heading outline of a Markdown file")
    outline.add_argument("file", type=Path)
    return parser


async def _run(args: argparse.Namespace) -> int:
    if not args.file.is_file():
        raise FileNotFoundError(f"Markdown file not found: {args.file}")

    content = args.file.read_text(encoding="utf-8")
    renderer = DocumentRenderer()
    html = await renderer.render(content, source=args.file.name)

    if args.command == "outline":
        roots = extract_heading_hierarchy(html)
        print(f"Headings: {count_headings(roots)}")
        print(format_heading_outline(roots))
        return 0

    mtime = datetime.fromtimestamp(args.file.stat().st_mtime, tz=timezone.utc)
    metadata = renderer.get_metadata(
        content, md_file=args.file.name, mtime=mtime, external=args.external
    )
    logger.info("Rendered %s (%s)", args.file, metadata.slug)
    print(html)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=DOCWEAVE_LOG_LEVEL.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        return asyncio.run(_run(args))
    except (DocweaveError, FileNotFoundError) as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
