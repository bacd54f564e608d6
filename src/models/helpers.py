"""
Helper specification and metadata models

Defines the structure and categories of the built-in functions exposed
to section programs, for registry management and documentation.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Callable, List


class HelperCategory(Enum):
    """
    Categories of program helpers

    Used for organization and documentation generation.
    """
    MARKDOWN = "markdown"    # link(), image()
    BADGE = "badge"          # shield()
    TEXT = "text"            # prefix_delimiter_replace()


@dataclass
class HelperSpec:
    """
    Specification for a helper function

    Attributes:
        name: Name the function is bound to inside a program
        category: Category for organization
        description: Human-readable description
        handler: The callable itself
        examples: Example usage strings
        aliases: Alternative names bound to the same callable
    """
    name: str
    category: HelperCategory
    description: str
    handler: Callable[..., str]
    examples: List[str] = field(default_factory=list)
    aliases: List[str] = field(default_factory=list)

    def names(self) -> List[str]:
        """Every name this helper is bound to"""
        return [self.name, *self.aliases]

    def matches(self, helper_name: str) -> bool:
        return helper_name in self.names()

    def summary(self) -> str:
        """
        One-line description for listings

        Example:
            "prefix_delimiter_replace (prefixDelimiterReplace): Replace ... | e.g. output = ..."
        """
        line = self.name
        if self.aliases:
            line += f" ({', '.join(self.aliases)})"
        line += f": {self.description}"
        if self.examples:
            line += f" | e.g. {self.examples[0]}"
        return line
