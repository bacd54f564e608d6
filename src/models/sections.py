"""
Section models

Value types produced by the block parser and consumed by the compiler.
None of them outlive a single compile pass.
"""

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class LiteralSpan:
    """
    Passthrough text between (or around) sections

    Reproduced verbatim in the compiled document, whitespace and newlines
    included.

    Attributes:
        text: The literal text
        span: (start, end) offsets in the original document
    """
    text: str
    span: Tuple[int, int]


@dataclass(frozen=True)
class Section:
    """
    One named, delimiter-bounded region of a document

    Attributes:
        name: Identifier following the open-marker on the first line
        program: Text between the first line and the close-marker
        stale_output: Text between the close-marker and the closing tag
        span: (start, end) offsets in the original document
        header: Raw text between the open-marker and the first newline
                (the name plus its leading space, if any)
        closing_tag: Raw closing tag text, markers included

    Example:
        For "<!--# ver\\nprint\\n#-->\\nold\\n<!--#/ver #-->":
        Section(
            name="ver",
            program="print\\n",
            stale_output="\\nold\\n",
            span=(0, 39),
            header=" ver",
            closing_tag="<!--#/ver #-->"
        )
    """
    name: str
    program: str
    stale_output: str
    span: Tuple[int, int]
    header: str
    closing_tag: str


@dataclass(frozen=True)
class CompiledSection:
    """
    A section after evaluation, ready to serialize

    Attributes:
        section: The parsed section this was compiled from
        rendered_output: Evaluator output, newline-normalized
    """
    section: Section
    rendered_output: str

    @property
    def name(self) -> str:
        return self.section.name

    @property
    def program(self) -> str:
        """The original, untemplated program text"""
        return self.section.program


DocumentPart = Union[LiteralSpan, Section]
