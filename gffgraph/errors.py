"""
Exceptions raised while reading GFF3 input.
"""

from typing import Optional

__all__ = [
    "GFFParserError",
    "GFF3FormatError",
    "GFF3SourceError",
]


class GFFParserError(Exception):
    """Error when reading a GFF3 source."""

    def __init__(self, message: str, source: Optional[str] = None, line_num: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.source = source
        self.line_num = line_num


class GFF3FormatError(GFFParserError):
    """A line is structurally broken and the rest of the file cannot be trusted."""


class GFF3SourceError(GFFParserError):
    """The source could not be opened, read or rewound."""
