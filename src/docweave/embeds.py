"""Single-line embed directives for markdown-it.

Each directive occupies exactly one line::

    [codesandbox <id> [<path>] [<width> <height>]]
    [typescript-sandbox <id> [<width> <height>]]
    [youtube <id-or-url> [<width> <height>]]
    [vimeo <id-or-url> [<width> <height>]]
    [twitter <id-or-url>]

All directives are described by one ordered grammar table and recognized by
a single block rule registered ahead of ``paragraph``. Lines that match no
entry fall through to normal Markdown handling.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from html import escape
from typing import Any, Callable, Sequence
from urllib.parse import parse_qs, urlparse

from markdown_it import MarkdownIt
from markdown_it.rules_block import StateBlock
from markdown_it.token import Token

from docweave.schemas import DirectiveToken

DEFAULT_VIDEO_WIDTH = "1024"
DEFAULT_VIDEO_HEIGHT = "576"

_URL_RE = re.compile(r"^https?://")
_DIGITS_RE = re.compile(r"^\d+$")
_TWEET_PATH_RE = re.compile(r"/status/(\d+)")
_VIDEO_ALLOW = (
    "accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; picture-in-picture"
)
_RULE_ALT = ["paragraph", "reference", "blockquote", "list"]

EmbedMeta = dict[str, Any]


@dataclass(frozen=True)
class EmbedDirective:
    """One row of the grammar table.

    Attributes:
        name: Directive keyword inside the brackets.
        pattern: Full-line pattern; groups are the positional arguments.
        parse: Maps the regex groups to the token metadata.
        render: Maps token metadata to an HTML fragment.
    """

    name: str
    pattern: re.Pattern[str]
    parse: Callable[[tuple[str | None, ...]], EmbedMeta]
    render: Callable[[EmbedMeta], str]

    @property
    def token_type(self) -> str:
        return f"{self.name.replace('-', '_')}_embed"


def _hostname_matches(url: str, *hosts: str) -> tuple[bool, Any]:
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname or ""
    except ValueError:
        # Malformed netloc, e.g. an unbalanced IPv6 bracket.
        return False, None
    return any(host in hostname for host in hosts), parsed


def extract_youtube_id(url: str) -> str | None:
    """Return the video ID of a youtube.com or youtu.be URL.

    The ``v`` query parameter takes precedence over the first path segment.
    """
    matched, parsed = _hostname_matches(url, "youtube.com", "youtu.be")
    if not matched:
        return None
    video_id = parsed.path.split("/")[1] if "/" in parsed.path else ""
    query = parse_qs(parsed.query)
    if "v" in query:
        video_id = query["v"][0]
    return video_id or None


def extract_vimeo_id(url: str) -> str | None:
    matched, parsed = _hostname_matches(url, "vimeo.com")
    if not matched:
        return None
    segments = parsed.path.split("/")
    return segments[1] if len(segments) > 1 and segments[1] else None


def extract_tweet_id(url: str) -> str | None:
    """Return the numeric status ID of a twitter.com or x.com URL."""
    matched, parsed = _hostname_matches(url, "twitter.com", "x.com")
    if not matched:
        return None
    match = _TWEET_PATH_RE.search(parsed.path)
    return match.group(1) if match else None


def _resolve(id_or_url: str, extractor: Callable[[str], str | None]) -> str | None:
    if _URL_RE.match(id_or_url):
        return extractor(id_or_url)
    return id_or_url


def _size_style(meta: EmbedMeta) -> str:
    width, height = meta.get("width"), meta.get("height")
    if width and height:
        return f'style="width: {escape(width)}px; height: {escape(height)}px; border: 0;"'
    return ""


def _sandbox_section(url: str, meta: EmbedMeta) -> str:
    return f'<section class="sandbox"><iframe src="{escape(url)}" {_size_style(meta)}></iframe></section>\n'


def _video_section(css_class: str, url: str, meta: EmbedMeta) -> str:
    width = escape(meta.get("width") or DEFAULT_VIDEO_WIDTH)
    height = escape(meta.get("height") or DEFAULT_VIDEO_HEIGHT)
    return (
        f'<section class="{css_class}"><iframe src="{escape(url)}" {_size_style(meta)} '
        f'width="{width}" height="{height}" frameborder="0" allow="{_VIDEO_ALLOW}" '
        "allowfullscreen></iframe></section>\n"
    )


def _parse_codesandbox(groups: tuple[str | None, ...]) -> EmbedMeta:
    sandbox_id, file_path, width, height = groups
    # A bare number after the id is a width, not a path.
    if file_path is not None and _DIGITS_RE.match(file_path):
        height = width or file_path
        width = file_path
        file_path = None
    return {"sandbox_id": sandbox_id, "file_path": file_path, "width": width, "height": height}


def _render_codesandbox(meta: EmbedMeta) -> str:
    url = f"https://codesandbox.io/p/sandbox/{meta['sandbox_id'] or ''}"
    if meta.get("file_path"):
        url = f"{url}?file={meta['file_path']}"
    return _sandbox_section(url, meta)


def _parse_typescript_sandbox(groups: tuple[str | None, ...]) -> EmbedMeta:
    sandbox_id, width, height = groups
    return {"sandbox_id": sandbox_id, "width": width, "height": height}


def _render_typescript_sandbox(meta: EmbedMeta) -> str:
    url = f"https://www.typescriptlang.org/play/?#code/{meta['sandbox_id'] or ''}"
    return _sandbox_section(url, meta)


def _video_parser(extractor: Callable[[str], str | None]) -> Callable[[tuple[str | None, ...]], EmbedMeta]:
    def parse(groups: tuple[str | None, ...]) -> EmbedMeta:
        id_or_url, width, height = groups
        return {
            "video_id": _resolve(id_or_url or "", extractor),
            "width": width or DEFAULT_VIDEO_WIDTH,
            "height": height or DEFAULT_VIDEO_HEIGHT,
        }

    return parse


def _render_youtube(meta: EmbedMeta) -> str:
    return _video_section("youtube", f"https://www.youtube.com/embed/{meta['video_id'] or ''}", meta)


def _render_vimeo(meta: EmbedMeta) -> str:
    return _video_section("vimeo", f"https://player.vimeo.com/video/{meta['video_id'] or ''}", meta)


def _parse_twitter(groups: tuple[str | None, ...]) -> EmbedMeta:
    (id_or_url,) = groups
    return {"tweet_id": _resolve(id_or_url or "", extract_tweet_id)}


def _render_twitter(meta: EmbedMeta) -> str:
    tweet_id = escape(meta["tweet_id"] or "")
    return (
        '<section class="twitter"><blockquote class="twitter-tweet">'
        f'<a href="https://twitter.com/i/status/{tweet_id}"></a></blockquote> '
        '<script async src="https://platform.twitter.com/widgets.js" charset="utf-8"></script>'
        "</section>\n"
    )


_SIZE = r"(?:\s+(\d+))?(?:\s+(\d+))?"

EMBED_DIRECTIVES: tuple[EmbedDirective, ...] = (
    EmbedDirective(
        name="codesandbox",
        pattern=re.compile(r"^\[codesandbox\s+([a-zA-Z0-9-]+)(?:\s+(/[^\s\]]+|\d+))?" + _SIZE + r"\s*\]$"),
        parse=_parse_codesandbox,
        render=_render_codesandbox,
    ),
    EmbedDirective(
        name="typescript-sandbox",
        pattern=re.compile(r"^\[typescript-sandbox\s+([a-zA-Z0-9+\-]+)" + _SIZE + r"\s*\]$"),
        parse=_parse_typescript_sandbox,
        render=_render_typescript_sandbox,
    ),
    EmbedDirective(
        name="youtube",
        pattern=re.compile(r"^\[youtube\s+([^\s\]]+)" + _SIZE + r"\s*\]$"),
        parse=_video_parser(extract_youtube_id),
        render=_render_youtube,
    ),
    EmbedDirective(
        name="vimeo",
        pattern=re.compile(r"^\[vimeo\s+([^\s\]]+)" + _SIZE + r"\s*\]$"),
        parse=_video_parser(extract_vimeo_id),
        render=_render_vimeo,
    ),
    EmbedDirective(
        name="twitter",
        pattern=re.compile(r"^\[twitter\s+([^\s\]]+)\s*\]$"),
        parse=_parse_twitter,
        render=_render_twitter,
    ),
)


def match_directive(
    line: str, directives: Sequence[EmbedDirective] = EMBED_DIRECTIVES
) -> tuple[EmbedDirective, re.Match[str]] | None:
    """Find the first table entry whose pattern matches the trimmed line."""
    line = line.strip()
    if not line.startswith("["):
        return None
    for directive in directives:
        match = directive.pattern.match(line)
        if match is not None:
            return directive, match
    return None


def _make_embed_rule(directives: Sequence[EmbedDirective]):
    def embed_rule(state: StateBlock, startLine: int, endLine: int, silent: bool) -> bool:
        start = state.bMarks[startLine] + state.tShift[startLine]
        maximum = state.eMarks[startLine]
        line = state.src[start:maximum].strip()

        found = match_directive(line, directives)
        if found is None:
            return False
        if silent:
            return True

        directive, match = found
        groups = match.groups()
        token = state.push(directive.token_type, "div", 0)
        token.markup = line
        token.block = True
        token.map = [startLine, startLine + 1]
        token.meta = {
            "directive": DirectiveToken(
                name=directive.name,
                args=tuple(group for group in groups if group is not None),
                line_span=(startLine, startLine + 1),
            ),
            **directive.parse(groups),
        }
        state.line = startLine + 1
        return True

    return embed_rule


def _make_render_rule(directive: EmbedDirective):
    def render(tokens: Sequence[Token], idx: int, options: Any, env: Any) -> str:
        return directive.render(tokens[idx].meta)

    return render


def embeds_plugin(md: MarkdownIt, directives: Sequence[EmbedDirective] = EMBED_DIRECTIVES) -> None:
    """Register the embed block rule and one renderer per directive."""
    md.block.ruler.before("paragraph", "embed", _make_embed_rule(directives), {"alt": _RULE_ALT})
    for directive in directives:
        md.renderer.rules[directive.token_type] = _make_render_rule(directive)
