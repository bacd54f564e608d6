"""
Block parser for comment-delimited sections

Splits a document into passthrough literal spans and named sections.

A section has the form:

    <open-marker> name
    program text
    <close-marker>
    previously rendered output
    <open-marker>/name <close-marker>

The parser is an explicit cursor scan built on str.find. Each step looks
for the nearest next marker and never moves the cursor backwards, so
matching is lazy per occurrence and no text is consumed twice.

Scanning steps for one section:
1. Find the next open-marker; everything before it is literal text
2. Read the header (rest of that line) and derive the section name
3. Program runs to the first close-marker
4. Stale output runs to the first closing tag; its name must match

Example:
    >>> parser = Parser("intro\\n<!--# v\\nx\\n#-->\\nold\\n<!--#/v #-->\\n",
    ...                 DelimiterPair("<!--#", "#-->"))
    >>> [type(part).__name__ for part in parser.parse()]
    ['LiteralSpan', 'Section', 'LiteralSpan']
"""

from typing import List, Optional, Tuple, Type

from ..models.delimiters import DelimiterPair
from ..models.sections import DocumentPart, LiteralSpan, Section
from .errors import (
    ParseError,
    MismatchedSectionName,
    UnterminatedSection,
    InvalidSectionName,
    UnexpectedClosingTag,
)
from .log import LOG

CLOSING_SLASH = "/"


class Parser:
    """
    Parser for delimiter-bounded sections

    Handles:
    - Any number of sections mixed with arbitrary text
    - Open-markers inside stale output that are not closing tags
    - Closing tags with or without a space before the slash
    - Error reporting with line numbers and source context
    """

    def __init__(self, source: str, delimiters: DelimiterPair, debug: bool = False):
        """
        Initialize parser with source text

        Args:
            source: Document text (line-feed newlines only)
            delimiters: Open/close markers for this document type
            debug: Enable debug output for parser operations

        Attributes:
            source: Source text being parsed
            delimiters: Marker pair in use
            debug: Debug mode flag
            position: Current character position in source (for scanning)
        """
        self.source = source
        self.delimiters = delimiters
        self.debug = debug
        self.position = 0

    @property
    def open_marker(self) -> str:
        return self.delimiters.open_marker

    @property
    def close_marker(self) -> str:
        return self.delimiters.close_marker

    def parse(self) -> List[DocumentPart]:
        """
        Parse source text into an ordered list of document parts

        Returns:
            LiteralSpan and Section objects in document order. Adjacent
            sections have no empty literal between them; a document with
            no sections yields one LiteralSpan (or nothing if empty).

        Raises:
            ParseError: The first structural problem found; the caller
                        gets no partial result
        """
        parts: List[DocumentPart] = []
        self.position = 0

        while True:
            start = self.source.find(self.open_marker, self.position)
            if start == -1:
                break

            if start > self.position:
                parts.append(LiteralSpan(self.source[self.position:start], (self.position, start)))

            section = self.section_parse(start)
            if self.debug:
                LOG(f"Section '{section.name}' spans {section.span[0]}..{section.span[1]}", level=3)
            parts.append(section)
            self.position = section.span[1]

        if self.position < len(self.source):
            parts.append(LiteralSpan(self.source[self.position:], (self.position, len(self.source))))

        return parts

    def section_parse(self, start: int) -> Section:
        """
        Parse one section whose open-marker begins at start

        Args:
            start: Offset of the open-marker

        Returns:
            The parsed Section, with span ending right after its closing tag
        """
        header_start = start + len(self.open_marker)

        if self.closingTag_nameStart(start) is not None:
            self.error(
                UnexpectedClosingTag,
                "Found a closing tag where a section should open",
                start,
            )

        newline = self.source.find("\n", header_start)
        if newline == -1:
            self.error(InvalidSectionName, "Section header runs to end of input", start)

        header = self.source[header_start:newline]
        if self.close_marker in header:
            self.error(
                InvalidSectionName,
                f"Section header {header!r} contains the close-marker {self.close_marker!r}",
                start,
            )

        name = self.sectionName_extract(header)
        if not name:
            self.error(InvalidSectionName, "Section header has no name", start)

        program_start = newline + 1
        program_end = self.source.find(self.close_marker, program_start)
        if program_end == -1:
            self.error(
                UnterminatedSection,
                f"Section '{name}' has no {self.close_marker!r} after its program",
                start,
            )

        output_start = program_end + len(self.close_marker)
        tag_start, name_start = self.closingTag_find(output_start, name, start)

        tag_close = self.source.find(self.close_marker, name_start)
        if tag_close == -1:
            self.error(
                UnterminatedSection,
                f"Closing tag of section '{name}' has no {self.close_marker!r}",
                tag_start,
            )

        closing_name = self.source[name_start:tag_close]
        if closing_name.endswith(" "):
            closing_name = closing_name[:-1]
        if closing_name != name:
            self.error(
                MismatchedSectionName,
                f"Expected closing tag for section '{name}', found '/{closing_name}'",
                tag_start,
            )

        end = tag_close + len(self.close_marker)
        return Section(
            name=name,
            program=self.source[program_start:program_end],
            stale_output=self.source[output_start:tag_start],
            span=(start, end),
            header=header,
            closing_tag=self.source[tag_start:end],
        )

    @staticmethod
    def sectionName_extract(header: str) -> str:
        """
        Derive a section name from its header line

        Exactly one leading space is stripped; nothing else is trimmed.

        Example:
            " badges"  -> "badges"
            "badges"   -> "badges"
            "  badges" -> " badges"
        """
        if header.startswith(" "):
            return header[1:]
        return header

    def closingTag_nameStart(self, tag_start: int) -> Optional[int]:
        """
        Check whether the open-marker at tag_start begins a closing tag

        A closing tag is the open-marker, an optional single space, then "/".

        Returns:
            Offset just past the slash, or None if this is not a closing tag
        """
        pos = tag_start + len(self.open_marker)
        if self.source.startswith(" ", pos):
            pos += 1
        if self.source.startswith(CLOSING_SLASH, pos):
            return pos + len(CLOSING_SLASH)
        return None

    def closingTag_find(self, cursor: int, name: str, section_start: int) -> Tuple[int, int]:
        """
        Find the first closing tag at or after cursor

        Open-markers that do not start a closing tag are skipped; they
        belong to the stale output.

        Returns:
            (tag_start, name_start) offsets

        Raises:
            UnterminatedSection: No closing tag remains in the document
        """
        while True:
            tag_start = self.source.find(self.open_marker, cursor)
            if tag_start == -1:
                self.error(
                    UnterminatedSection,
                    f"Section '{name}' is never closed",
                    section_start,
                )
            name_start = self.closingTag_nameStart(tag_start)
            if name_start is not None:
                return tag_start, name_start
            cursor = tag_start + len(self.open_marker)

    def lineNumber_at(self, position: int) -> int:
        """1-based line number of a character offset"""
        return self.source.count("\n", 0, position) + 1

    def error(self, error_cls: Type[ParseError], message: str, position: int) -> None:
        """
        Report parser error with source context

        Raises error_cls with a detailed message including:
        - Custom error message
        - Line number and character position
        - Source context (±40 characters around error)
        - Caret indicator pointing to error position

        Raises:
            ParseError: Always (this is an error reporting function)

        Example output:
            MismatchedSectionName:
            Expected closing tag for section 'a', found '/b'
            Line 5, position 42
            Context: ...old output\\n<!--#/b #-->...
                                  ^
        """
        line_number = self.lineNumber_at(position)
        context_start = max(0, position - 40)
        context_end = min(len(self.source), position + 40)
        context = self.source[context_start:context_end].replace("\n", "\\n")
        caret_offset = len(self.source[context_start:position].replace("\n", "\\n"))

        raise error_cls(
            f"\n{message}\n"
            f"Line {line_number}, position {position}\n"
            f"Context: ...{context}...\n"
            f"         {' ' * (3 + caret_offset)}^",
            line_number=line_number,
            position=position,
        )


def parse(document: str, delimiters: DelimiterPair) -> List[DocumentPart]:
    """Parse document into literal spans and sections"""
    return Parser(document, delimiters).parse()
