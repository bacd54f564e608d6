"""
End-to-end compilation tests

Tests the full pipeline with the default markers, properties and helpers:
markdown source → FreshMark → compiled markdown.
"""

import pytest

from freshmark import FreshMark, Properties, WarningCollector, DelimiterPair
from freshmark.lib.errors import EvaluationError, MismatchedSectionName
from freshmark.lib.log import state_connectToLogger
from freshmark.models import ProgramState


PROPERTIES = {
    "name": "freshmark",
    "group": "com.example",
    "version": "1.2.3",
    "stable": "1.2.0",
    "url": "https://github.com/example/freshmark",
}

README = """\
# FreshMark

<!---freshmark shields
output = [
    link(shield('Maven artifact', 'mavenCentral', '{{group}}:{{name}}', 'blue'), 'https://search.maven.org/#search|gav|1|g:"{{group}}" AND a:"{{name}}"'),
    link(shield('Latest version', 'latest', '{{stable}}', 'brightgreen'), '{{url}}/releases'),
    link(image('Travis CI', 'https://travis-ci.org/example/freshmark.svg?branch=master'), 'https://travis-ci.org/example/freshmark'),
    ]
output = '\\n'.join(output)
-->
stale badges
<!---freshmark /shields -->

Some hand-written prose that must survive untouched.
  Indented line

<!---freshmark javadoc
output = prefix_delimiter_replace(input, 'https://javadoc.io/doc/{{group}}/{{name}}/', '/', stable)
-->
See the [javadoc](https://javadoc.io/doc/com.example/freshmark/1.0.0/index.html).
<!---freshmark /javadoc -->
"""


def compile_readme(text=README, **kwargs):
    kwargs.setdefault("warning_sink", WarningCollector())
    return FreshMark(PROPERTIES, **kwargs).compile(text)


class TestReadmeCompilation:
    """A realistic README with badges and a version bump"""

    def test_badges_rendered(self):
        result = compile_readme()

        assert (
            "[![Maven artifact](https://img.shields.io/badge/mavenCentral-com.example%3Afreshmark-blue.svg)]"
            in result
        )
        assert (
            "[![Latest version](https://img.shields.io/badge/latest-1.2.0-brightgreen.svg)]"
            "(https://github.com/example/freshmark/releases)"
        ) in result
        assert "stale badges" not in result

    def test_version_replaced_from_input(self):
        result = compile_readme()
        assert "https://javadoc.io/doc/com.example/freshmark/1.2.0/index.html" in result
        assert "1.0.0" not in result

    def test_prose_untouched(self):
        result = compile_readme()
        assert "Some hand-written prose that must survive untouched.\n" in result
        assert "  Indented line\n" in result
        assert result.startswith("# FreshMark\n\n<!---freshmark shields\n")
        assert result.endswith("<!---freshmark /javadoc -->\n")

    def test_programs_kept_verbatim(self):
        result = compile_readme()
        assert "'{{group}}:{{name}}'" in result
        assert "'https://javadoc.io/doc/{{group}}/{{name}}/'" in result

    def test_fixed_point(self):
        once = compile_readme()
        assert compile_readme(once) == once

    def test_no_warnings_when_all_keys_known(self):
        warnings = WarningCollector()
        compile_readme(warning_sink=warnings)
        assert warnings.messages == []

    def test_parallel_workers_same_result(self):
        assert compile_readme(max_workers=4) == compile_readme()

    def test_properties_instance_accepted(self):
        warnings = WarningCollector()
        result = FreshMark(Properties(PROPERTIES), warning_sink=warnings).compile(README)
        assert result == compile_readme()


class TestFailureModes:

    def test_unknown_key_completes(self):
        warnings = WarningCollector()
        text = "<!---freshmark x\noutput = '{{missingKey}}'\n-->\n<!---freshmark /x -->\n"

        result = FreshMark({}, warning_sink=warnings).compile(text)

        assert warnings.messages == ["Unknown key 'missingKey'"]
        assert "-->\nmissingKey=UNKNOWN\n<!---freshmark /x -->" in result

    def test_mismatched_tags(self):
        text = "<!---freshmark a\noutput = ''\n-->\n<!---freshmark /b -->\n"
        with pytest.raises(MismatchedSectionName):
            compile_readme(text)

    def test_broken_program_names_section(self):
        text = README.replace("stable)", "undefined_name)")
        with pytest.raises(EvaluationError) as exc_info:
            compile_readme(text)
        assert exc_info.value.section == "javadoc"


class TestConfiguration:

    def test_custom_delimiters(self):
        text = "/*# v\noutput = version\n#*/\nold\n/*#/v #*/\n"
        result = compile_readme(text, delimiters=DelimiterPair("/*#", "#*/"))
        assert result == "/*# v\noutput = version\n#*/\n1.2.3\n/*#/v #*/\n"

    def test_default_delimiters_from_settings(self):
        freshmark = FreshMark({})
        assert freshmark.delimiters == DelimiterPair("<!---freshmark", "-->")

    def test_canonical_tags(self):
        text = "<!---freshmark v\noutput = version\n--><!---freshmark/v-->"
        result = compile_readme(text, canonical_tags=True)
        assert result == "<!---freshmark v\noutput = version\n-->\n1.2.3\n<!---freshmark/v -->"

    def test_compiles_with_logger_connected(self):
        """Verbose logging does not change output"""
        state_connectToLogger(ProgramState(verbosity=3))
        try:
            assert compile_readme() == compile_readme()
        finally:
            state_connectToLogger(None)
