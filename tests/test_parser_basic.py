"""
Basic parser tests - simplest cases

Tests empty source, plain text, single and multiple sections.
"""

import pytest

from freshmark.lib.parser import Parser, parse
from freshmark.models import DelimiterPair, LiteralSpan, Section


MARKERS = DelimiterPair("<!--#", "#-->")


def sections_of(parts):
    return [part for part in parts if isinstance(part, Section)]


class TestEmptyAndPlain:
    """Documents without sections"""

    def test_empty_source(self):
        """Empty string should parse to empty list"""
        assert Parser("", MARKERS).parse() == []

    def test_plain_text_is_one_literal(self):
        """Text without markers is a single literal span"""
        source = "# Title\n\nSome text.\n"
        parts = Parser(source, MARKERS).parse()

        assert parts == [LiteralSpan(source, (0, len(source)))]

    def test_close_marker_alone_is_literal(self):
        """A stray close-marker does not open anything"""
        source = "text #--> more\n"
        parts = parse(source, MARKERS)

        assert len(parts) == 1
        assert parts[0].text == source

    def test_whitespace_preserved(self):
        """Literal spans keep exact whitespace"""
        source = "  \n\t\n\n"
        parts = parse(source, MARKERS)
        assert parts[0].text == source


class TestSingleSection:
    """One section, various surroundings"""

    def test_section_fields(self):
        """Name, program and stale output are split out"""
        source = "<!--# ver\nprint\n#-->\nold\n<!--#/ver #-->"
        parts = Parser(source, MARKERS).parse()

        assert len(parts) == 1
        section = parts[0]
        assert section.name == "ver"
        assert section.program == "print\n"
        assert section.stale_output == "\nold\n"
        assert section.span == (0, len(source))
        assert section.header == " ver"
        assert section.closing_tag == "<!--#/ver #-->"

    def test_name_without_leading_space(self):
        """Header without a space after the marker"""
        parts = parse("<!--#ver\nx\n#-->\n<!--#/ver #-->", MARKERS)
        assert parts[0].name == "ver"
        assert parts[0].header == "ver"

    def test_only_one_leading_space_stripped(self):
        """Two spaces leave one space in the name"""
        parts = parse("<!--#  ver\nx\n#-->\n<!--#/ ver #-->", MARKERS)
        assert parts[0].name == " ver"

    def test_closing_tag_with_space_before_slash(self):
        """Closing tag may have a single space before the slash"""
        parts = parse("<!--# ver\nx\n#-->\nold\n<!--# /ver #-->", MARKERS)
        assert parts[0].name == "ver"
        assert parts[0].closing_tag == "<!--# /ver #-->"

    def test_closing_tag_without_trailing_space(self):
        """Closing tag may omit the space before the close-marker"""
        parts = parse("<!--# ver\nx\n#-->\nold\n<!--#/ver#-->", MARKERS)
        assert parts[0].stale_output == "\nold\n"

    def test_empty_program_and_output(self):
        """Program and stale output may both be empty"""
        parts = parse("<!--# ver\n#--><!--#/ver #-->", MARKERS)
        assert parts[0].program == ""
        assert parts[0].stale_output == ""

    def test_multiline_program(self):
        """Program spans every line up to the close-marker"""
        source = "<!--# table\nrows = 3\noutput = 'x' * rows\n#-->\n\n<!--#/table #-->"
        section = parse(source, MARKERS)[0]
        assert section.program == "rows = 3\noutput = 'x' * rows\n"

    def test_surrounding_literals(self):
        """Text before and after a section is kept as literal spans"""
        source = "intro\n<!--# v\nx\n#-->\nold\n<!--#/v #-->\noutro\n"
        parts = parse(source, MARKERS)

        assert [type(part) for part in parts] == [LiteralSpan, Section, LiteralSpan]
        assert parts[0].text == "intro\n"
        assert parts[2].text == "\noutro\n"
        assert parts[2].span == (len(source) - len("\noutro\n"), len(source))

    def test_names_are_case_sensitive(self):
        """Section names keep their case"""
        parts = parse("<!--# Badges\nx\n#-->\n<!--#/Badges #-->", MARKERS)
        assert parts[0].name == "Badges"


class TestMultipleSections:
    """Several sections in one document"""

    def test_two_sections_in_order(self):
        """Sections come back in document order"""
        source = (
            "<!--# a\n1\n#-->\nA\n<!--#/a #-->\n"
            "middle\n"
            "<!--# b\n2\n#-->\nB\n<!--#/b #-->\n"
        )
        parts = parse(source, MARKERS)

        names = [section.name for section in sections_of(parts)]
        assert names == ["a", "b"]
        assert parts[1].text == "\nmiddle\n"

    def test_adjacent_sections_have_no_empty_literal(self):
        """Back-to-back sections produce no empty span between them"""
        source = "<!--# a\n#-->\n<!--#/a #--><!--# b\n#-->\n<!--#/b #-->"
        parts = parse(source, MARKERS)

        assert len(parts) == 2
        assert all(isinstance(part, Section) for part in parts)

    def test_parts_cover_whole_document(self):
        """Concatenating span texts reproduces the source"""
        source = "x<!--# a\np\n#-->o<!--#/a #-->y<!--# b\nq\n#-->o<!--#/b #-->z"
        parts = parse(source, MARKERS)

        rebuilt = "".join(source[part.span[0]:part.span[1]] for part in parts)
        assert rebuilt == source
        assert parts[0].span[0] == 0
        assert parts[-1].span[1] == len(source)

    def test_same_name_twice(self):
        """The same name may be used by two sections"""
        source = "<!--# a\n#-->\n<!--#/a #-->\n<!--# a\n#-->\n<!--#/a #-->"
        assert [s.name for s in sections_of(parse(source, MARKERS))] == ["a", "a"]


class TestOtherMarkers:
    """Markers are literal text, whatever they contain"""

    def test_regex_metacharacters_in_markers(self):
        """Markers with regex syntax are not treated as patterns"""
        markers = DelimiterPair("(*[", "]*)")
        parts = parse("(*[ s\np\n]*)\nout\n(*[/s ]*)", markers)
        assert parts[0].name == "s"
        assert parts[0].program == "p\n"

    def test_default_markdown_markers(self):
        """The markdown markers share the '--' character run"""
        markers = DelimiterPair("<!---freshmark", "-->")
        source = "<!---freshmark badges\noutput = 'x'\n-->\nx\n<!---freshmark /badges -->\n"
        parts = parse(source, markers)

        assert parts[0].name == "badges"
        assert parts[0].program == "output = 'x'\n"
        assert parts[0].stale_output == "\nx\n"
        assert parts[1].text == "\n"

    def test_empty_marker_rejected(self):
        """Both markers must be non-empty"""
        with pytest.raises(ValueError):
            DelimiterPair("", "-->")
        with pytest.raises(ValueError):
            DelimiterPair("<!--", "")
