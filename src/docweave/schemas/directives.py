"""Embed directive token model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class DirectiveToken(BaseModel):
    """A parsed single-line embed directive.

    Attributes:
        name: Directive name, e.g. "youtube".
        args: Positional arguments in source order, identifier first.
        line_span: Half-open (start, end) source line range.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    args: tuple[str, ...]
    line_span: tuple[int, int]
