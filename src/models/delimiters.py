"""
Delimiter model

The pair of literal marker strings that bound every section comment.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class DelimiterPair:
    """
    Open/close markers for one document type

    The markers are matched as literal text, never as patterns. The
    open-marker (intron) starts both the opening line and the closing tag
    of a section; the close-marker (exon) ends the program and the
    closing tag.

    Attributes:
        open_marker: Literal text that opens a section comment
        close_marker: Literal text that closes a section comment

    Example:
        For markdown:
        DelimiterPair(open_marker="<!---freshmark", close_marker="-->")
    """
    open_marker: str
    close_marker: str

    def __post_init__(self) -> None:
        if not self.open_marker or not self.close_marker:
            raise ValueError(
                f"Delimiter markers must be non-empty, got "
                f"open={self.open_marker!r} close={self.close_marker!r}"
            )

    def openTag_make(self, name: str) -> str:
        """Canonical first line of a section, including its newline"""
        return f"{self.open_marker} {name}\n"

    def closeTag_make(self, name: str) -> str:
        """Canonical closing tag of a section"""
        return f"{self.open_marker}/{name} {self.close_marker}"
