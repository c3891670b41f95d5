"""Source positions for tokens and comments."""

__all__ = ["SourcePosition"]

from dataclasses import dataclass


@dataclass(frozen=True)
class SourcePosition:
    """Source code position information for tokens and comments.

    Attributes:
        filename: Source file path, or None for anonymous text
        start_line: Starting line number (1-indexed)
        start_column: Starting column number (1-indexed)
        end_line: Ending line number (1-indexed)
        end_column: Column just past the last character (1-indexed)
    """
    filename: str | None = None
    start_line: int | None = None
    start_column: int | None = None
    end_line: int | None = None
    end_column: int | None = None

    @classmethod
    def from_token(cls, token, filename=None):
        """Build a position from a lark token."""
        return cls(
            filename,
            getattr(token, "line", None),
            getattr(token, "column", None),
            getattr(token, "end_line", None),
            getattr(token, "end_column", None),
        )

    def location(self) -> str:
        """Format as ``file:line:column`` for messages."""
        name = self.filename or "<text>"
        if self.start_line is None:
            return name
        return f"{name}:{self.start_line}:{self.start_column}"

    def __str__(self) -> str:
        return self.location()
