"""Custom exceptions for docweave."""

from __future__ import annotations

from typing import Any


class DocweaveError(Exception):
    """Base exception for docweave operations."""


class FetchError(DocweaveError):
    """Error during remote content fetching."""


class DocumentNotFoundError(FetchError):
    """Remote document does not exist."""


class MetadataError(DocweaveError):
    """Error while extracting document metadata.

    Attributes:
        source: Identity of the offending document (file name or URL).
    """

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class MissingFrontmatterError(MetadataError):
    """Document carries no frontmatter block."""


class FrontmatterParseError(MetadataError):
    """Frontmatter block is not a valid YAML mapping."""


class FrontmatterValidationError(MetadataError):
    """Frontmatter does not satisfy the document schema."""

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message, source=source)
        self.errors = errors or []
