"""
Built-in helper functions for section programs

Each helper is registered as a HelperSpec and bound by name into every
section's evaluation namespace.
"""

import re
from typing import Callable, Dict, List, Optional
from urllib.parse import quote_plus

from ..models.helpers import HelperSpec, HelperCategory

SHIELDS_BASE_URL = "https://img.shields.io/badge/"


def link(text: str, url: str) -> str:
    """Markdown link: [text](url)"""
    return f"[{text}]({url})"


def image(alt_text: str, url: str) -> str:
    """Markdown image: ![alt](url)"""
    return "!" + link(alt_text, url)


def shield_escape(raw: str) -> str:
    """
    Escape one badge field for a shields.io path

    shields.io uses "-" as its field separator and "_" for spaces, so
    literal dashes and underscores are doubled before URL-encoding.

    Example:
        >>> shield_escape("build-tool hello_world")
        'build--tool_hello__world'
    """
    return quote_plus(raw.replace("_", "__").replace("-", "--").replace(" ", "_"), safe="*")


def shield(alt_text: str, subject: str, status: str, color: str) -> str:
    """
    shields.io badge image

    Example:
        >>> shield("Maven artifact", "mavenCentral", "1.0", "blue")
        '![Maven artifact](https://img.shields.io/badge/mavenCentral-1.0-blue.svg)'
    """
    url = f"{SHIELDS_BASE_URL}{shield_escape(subject)}-{shield_escape(status)}-{shield_escape(color)}.svg"
    return image(alt_text, url)


def prefix_delimiter_replace(input: str, prefix: str, delimiter: str, replacement: str) -> str:
    """
    Replace whatever sits between each prefix and the next delimiter

    Example:
        >>> prefix_delimiter_replace("version 1.0.0, version 1.1.0.", "version ", ".", "2")
        'version 2.0.0, version 2.1.0.'

    The match is shortest-first, like the placeholder scanner: the
    replaced span stops at the first delimiter after the prefix.
    """
    pattern = re.compile(f"({re.escape(prefix)})(.*?)({re.escape(delimiter)})", re.DOTALL)
    return pattern.sub(lambda match: match.group(1) + replacement + match.group(3), input)


class HelperRegistry:
    """
    Registry of helper specifications

    Maps helper names (and aliases) to HelperSpec objects.
    """

    def __init__(self) -> None:
        """Initialize the registry and register all built-in helpers"""
        self.specs: Dict[str, HelperSpec] = {}
        self.markdownHelpers_register()
        self.badgeHelpers_register()
        self.textHelpers_register()

    def register(self, spec: HelperSpec) -> None:
        """Register a helper specification under its name and aliases"""
        for name in spec.names():
            self.specs[name] = spec

    def get(self, name: str) -> Optional[Callable[..., str]]:
        """Get helper function by name or alias, None if unknown"""
        spec = self.specs.get(name)
        return spec.handler if spec else None

    def spec_get(self, name: str) -> Optional[HelperSpec]:
        """Get full helper specification by name"""
        return self.specs.get(name)

    def helpers_listByCategory(self, category: HelperCategory) -> List[HelperSpec]:
        """Get all helpers in a category, each listed once"""
        unique = {id(spec): spec for spec in self.specs.values()}
        return [spec for spec in unique.values() if spec.category == category]

    def helpers_describe(self) -> List[str]:
        """Summary lines for every helper, grouped by category"""
        lines: List[str] = []
        for category in HelperCategory:
            specs = self.helpers_listByCategory(category)
            if specs:
                lines.append(f"[{category.value}]")
                lines.extend(f"  {spec.summary()}" for spec in specs)
        return lines

    def namespace_build(self) -> Dict[str, Callable[..., str]]:
        """Mapping of every bound name to its function, ready for a program namespace"""
        return {name: spec.handler for name, spec in self.specs.items()}

    def markdownHelpers_register(self) -> None:
        """Register markdown link/image helpers"""
        self.register(HelperSpec(
            name='link',
            category=HelperCategory.MARKDOWN,
            description='Markdown link',
            handler=link,
            examples=["link('docs', 'https://example.com/docs')"],
        ))
        self.register(HelperSpec(
            name='image',
            category=HelperCategory.MARKDOWN,
            description='Markdown image',
            handler=image,
            examples=["image('logo', 'images/logo.png')"],
        ))

    def badgeHelpers_register(self) -> None:
        """Register shields.io badge helper"""
        self.register(HelperSpec(
            name='shield',
            category=HelperCategory.BADGE,
            description='shields.io badge image (alt text, subject, status, color)',
            handler=shield,
            examples=["shield('Latest version', 'latest', '{{version}}', 'brightgreen')"],
        ))

    def textHelpers_register(self) -> None:
        """Register text manipulation helpers"""
        self.register(HelperSpec(
            name='prefix_delimiter_replace',
            category=HelperCategory.TEXT,
            description='Replace the text between each prefix and the following delimiter',
            handler=prefix_delimiter_replace,
            examples=["output = prefix_delimiter_replace(input, 'version ', '\\n', '{{version}}')"],
            aliases=['prefixDelimiterReplace'],
        ))
