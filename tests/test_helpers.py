"""
Helper function and registry tests
"""

import pytest

from freshmark.lib.helpers import (
    HelperRegistry,
    link,
    image,
    shield,
    shield_escape,
    prefix_delimiter_replace,
)
from freshmark.models import HelperCategory, HelperSpec


class TestMarkdownHelpers:

    def test_link(self):
        assert link("text", "https://example.com") == "[text](https://example.com)"

    def test_image(self):
        assert image("alt", "logo.png") == "![alt](logo.png)"


class TestShield:

    def test_shield(self):
        assert shield("Maven artifact", "mavenCentral", "1.0", "blue") == (
            "![Maven artifact](https://img.shields.io/badge/mavenCentral-1.0-blue.svg)"
        )

    @pytest.mark.parametrize(
        "raw, escaped",
        [
            ("plain", "plain"),
            ("two words", "two_words"),
            ("snake_case", "snake__case"),
            ("kebab-case", "kebab--case"),
            ("a/b", "a%2Fb"),
            ("3.0+", "3.0%2B"),
        ],
    )
    def test_shield_escape(self, raw, escaped):
        assert shield_escape(raw) == escaped

    def test_shield_fields_escaped(self):
        badge = shield("Latest", "latest-version", "1.0 beta", "bright_green")
        assert "latest--version-1.0_beta-bright__green.svg" in badge


class TestPrefixDelimiterReplace:

    def test_replace_each_occurrence(self):
        result = prefix_delimiter_replace("version 1.0.0, version 1.1.0.", "version ", ".", "2")
        assert result == "version 2.0.0, version 2.1.0."

    def test_no_match_unchanged(self):
        assert prefix_delimiter_replace("nothing", "x=", ";", "y") == "nothing"

    def test_prefix_without_delimiter_unchanged(self):
        assert prefix_delimiter_replace("x=1", "x=", ";", "2") == "x=1"

    def test_spans_lines(self):
        text = "compile 'com.example:lib:1.0'\ncompile 'com.example:lib:1.0'\n"
        result = prefix_delimiter_replace(text, "com.example:lib:", "'", "2.0")
        assert result == "compile 'com.example:lib:2.0'\ncompile 'com.example:lib:2.0'\n"

    def test_literal_prefix_and_delimiter(self):
        """Regex metacharacters are matched literally"""
        assert prefix_delimiter_replace("a(*)b(*)c", "(*)", "(*)", "X") == "a(*)X(*)c"


class TestRegistry:

    def test_builtins_registered(self):
        registry = HelperRegistry()
        for name in ["link", "image", "shield", "prefix_delimiter_replace", "prefixDelimiterReplace"]:
            assert registry.get(name) is not None

    def test_unknown_helper(self):
        assert HelperRegistry().get("nope") is None

    def test_alias_shares_spec(self):
        registry = HelperRegistry()
        assert registry.spec_get("prefixDelimiterReplace") is registry.spec_get("prefix_delimiter_replace")

    def test_list_by_category(self):
        registry = HelperRegistry()
        names = {spec.name for spec in registry.helpers_listByCategory(HelperCategory.MARKDOWN)}
        assert names == {"link", "image"}
        assert len(registry.helpers_listByCategory(HelperCategory.TEXT)) == 1

    def test_register_custom(self):
        registry = HelperRegistry()
        registry.register(HelperSpec(
            name="bold",
            category=HelperCategory.MARKDOWN,
            description="Bold text",
            handler=lambda text: f"**{text}**",
            aliases=["strong"],
        ))
        namespace = registry.namespace_build()
        assert namespace["bold"]("x") == "**x**"
        assert namespace["strong"]("x") == "**x**"

    def test_spec_matches(self):
        spec = HelperRegistry().spec_get("prefix_delimiter_replace")
        assert spec.matches("prefixDelimiterReplace")
        assert not spec.matches("link")

    def test_spec_summary(self):
        summary = HelperRegistry().spec_get("prefix_delimiter_replace").summary()
        assert summary.startswith("prefix_delimiter_replace (prefixDelimiterReplace): Replace")
        assert "| e.g. output = prefix_delimiter_replace(input," in summary

    def test_describe_groups_by_category(self):
        lines = HelperRegistry().helpers_describe()
        assert lines[0] == "[markdown]"
        assert lines[1].startswith("  link: Markdown link | e.g. link(")
        assert "[badge]" in lines
        assert "[text]" in lines
        assert len([line for line in lines if line.startswith("  ")]) == 4
