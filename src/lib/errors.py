"""
Exception hierarchy for freshmark

Parse errors and evaluation errors both abort a whole compile; nothing
is written for a document that raised. Unknown placeholder keys are not
errors, they go to the warning sink.
"""

from typing import Optional


class FreshmarkError(Exception):
    """Base class for every freshmark failure"""
    pass


class ParseError(FreshmarkError):
    """
    Raised when a document's section structure is malformed

    Attributes:
        line_number: 1-based line where the problem was detected
        position: Character offset in the document
    """

    def __init__(self, message: str, line_number: int = 0, position: int = 0) -> None:
        super().__init__(message)
        self.line_number = line_number
        self.position = position


class MismatchedSectionName(ParseError):
    """A closing tag names a different section than the one that is open"""
    pass


class UnterminatedSection(ParseError):
    """An opened section has no close-marker or no closing tag"""
    pass


class InvalidSectionName(ParseError):
    """A section header does not yield a usable name"""
    pass


class UnexpectedClosingTag(ParseError):
    """A closing tag appears where a section should open"""
    pass


class EvaluationError(FreshmarkError):
    """
    Raised when a section's program cannot be evaluated

    Attributes:
        section: Name of the section whose program failed (None until the
                 compiler attaches it)
    """

    def __init__(self, message: str, section: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.section = section

    def __str__(self) -> str:
        if self.section is None:
            return self.message
        return f"Section '{self.section}': {self.message}"


class PropertiesError(FreshmarkError):
    """Raised when a property file cannot be loaded"""
    pass
