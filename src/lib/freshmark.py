"""
Ready-to-use compiler with the default markers, properties and helpers

Markdown sections look like this:

    <!---freshmark shields
    output = link(shield('Latest version', 'latest', '{{version}}', 'blue'), '{{url}}')
    -->
    [![Latest version](https://img.shields.io/badge/latest-1.2.3-blue.svg)](https://example.com)
    <!---freshmark /shields -->
"""

from typing import Any, Mapping, Optional, Union

from ..models.delimiters import DelimiterPair
from .compiler import Compiler
from .evaluator import PythonEvaluator
from .helpers import HelperRegistry
from .log import WarningSink, warning_log
from .properties import Properties


class FreshMark:
    """
    Compiler preconfigured for markdown documents

    Placeholders resolve against the property table, and each program runs
    through PythonEvaluator with the properties and built-in helpers bound.

    Example:
        >>> freshmark = FreshMark({"version": "1.2.3"})
        >>> freshmark.compile(readme_text)
    """

    def __init__(
        self,
        properties: Union[Properties, Mapping[str, Any], None] = None,
        warning_sink: WarningSink = warning_log,
        delimiters: Optional[DelimiterPair] = None,
        max_workers: Optional[int] = None,
        canonical_tags: Optional[bool] = None,
        registry: Optional[HelperRegistry] = None,
    ) -> None:
        from ..config import appsettings

        if isinstance(properties, Properties):
            self.properties = Properties(properties.values, warning_sink)
        else:
            self.properties = Properties(properties, warning_sink)

        self.evaluator = PythonEvaluator(self.properties.values, registry=registry)
        self.compiler = Compiler(
            delimiters=delimiters or appsettings.delimiters_make(),
            key_resolver=self.properties.key_resolve,
            evaluator=self.evaluator,
            warning_sink=warning_sink,
            max_workers=max_workers if max_workers is not None else appsettings.max_workers,
            canonical_tags=(
                canonical_tags if canonical_tags is not None else appsettings.canonical_tags
            ),
        )

    @property
    def delimiters(self) -> DelimiterPair:
        return self.compiler.delimiters

    def compile(self, document: str) -> str:
        """Compile a document (line-feed newlines only)"""
        return self.compiler.compile(document)
