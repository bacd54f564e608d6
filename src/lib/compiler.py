"""
Compiler for sectioned documents

Re-runs every section program in a document and splices the fresh output
back in, leaving all text outside sections byte-for-byte unchanged.

Pipeline per document:
1. Parse the whole document (a parse error aborts before any evaluation)
2. Per section: template the program, evaluate it, normalize the output
3. Reassemble literal spans and compiled sections in document order

Compiling a compiled document again yields the same text, as long as the
evaluator is deterministic and the properties are unchanged.
"""

from concurrent.futures import ThreadPoolExecutor
from contextvars import copy_context
from typing import Any, Callable, List, Optional, Sequence, Union

from ..models.delimiters import DelimiterPair
from ..models.sections import CompiledSection, LiteralSpan, Section
from .errors import EvaluationError
from .evaluator import Evaluator
from .log import LOG, WarningSink, warning_log
from .parser import Parser
from .template import substitute

KeyResolver = Callable[[str, str], Optional[Any]]


class Compiler:
    """
    Compiles documents containing delimiter-bounded sections

    Responsibilities:
    - Resolve {{key}} placeholders per section
    - Delegate program execution to the evaluator
    - Normalize rendered output to start and end with one newline
    - Re-serialize sections with their untemplated program
    - Reassemble the document in original order
    """

    def __init__(
        self,
        delimiters: DelimiterPair,
        key_resolver: KeyResolver,
        evaluator: Evaluator,
        warning_sink: WarningSink = warning_log,
        max_workers: int = 1,
        canonical_tags: bool = False,
        debug: bool = False,
    ) -> None:
        """
        Initialize compiler

        Args:
            delimiters: Open/close markers for this document type
            key_resolver: (section, key) -> replacement. A resolver that
                          returns None for a key gets the unknown-key
                          warning and sentinel applied here
            evaluator: (section, templated program, stale output) -> output
            warning_sink: Receives unknown-key diagnostics
            max_workers: Sections evaluated concurrently (1 = sequential)
            canonical_tags: Rewrite tags to canonical form instead of
                            re-emitting the originals
            debug: Enable parser debug output
        """
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.delimiters = delimiters
        self.key_resolver = key_resolver
        self.evaluator = evaluator
        self.warning_sink = warning_sink
        self.max_workers = max_workers
        self.canonical_tags = canonical_tags
        self.debug = debug

    def compile(self, document: str) -> str:
        """
        Compile a document

        Args:
            document: Text with line-feed newlines only

        Returns:
            The document with every section's output regenerated

        Raises:
            ParseError: Malformed section structure
            EvaluationError: A section program failed
        """
        parts = Parser(document, self.delimiters, debug=self.debug).parse()
        sections = [part for part in parts if isinstance(part, Section)]
        LOG(f"Found {len(sections)} section(s)", level=2)

        compiled = iter(self.sections_evaluate(sections))
        spans: List[Union[LiteralSpan, CompiledSection]] = [
            next(compiled) if isinstance(part, Section) else part for part in parts
        ]
        return self.document_reassemble(spans)

    def sections_evaluate(self, sections: Sequence[Section]) -> List[CompiledSection]:
        """
        Evaluate sections, concurrently when max_workers > 1

        Results always come back in the order of the input sequence. The
        first failing section (in document order) is the one raised.
        """
        if self.max_workers == 1 or len(sections) < 2:
            return [self.section_evaluate(section) for section in sections]

        LOG(f"Evaluating {len(sections)} sections on {self.max_workers} workers", level=2)
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            # workers run in a copy of this context so LOG() sees the bound state
            futures = [
                executor.submit(copy_context().run, self.section_evaluate, section)
                for section in sections
            ]
            return [future.result() for future in futures]

    def key_resolve(self, section: str, key: str) -> str:
        """Resolve one placeholder as text, falling back to the unknown-key sentinel"""
        from ..config import appsettings

        value = self.key_resolver(section, key)
        if value is None:
            self.warning_sink(f"Unknown key '{key}'")
            return appsettings.sentinel_make(key)
        return str(value)

    def program_template(self, section: str, program: str) -> str:
        """Substitute placeholders in program using section-scoped resolution"""
        return substitute(program, lambda key: self.key_resolve(section, key))

    def section_evaluate(self, section: Section) -> CompiledSection:
        """
        Run one section's program and normalize its output

        Raises:
            EvaluationError: Evaluator failed; carries the section name
        """
        LOG(f"Compiling section '{section.name}'", level=2)
        templated = self.program_template(section.name, section.program)

        try:
            rendered = self.evaluator(section.name, templated, section.stale_output)
        except EvaluationError as e:
            if e.section is None:
                e.section = section.name
            raise
        except Exception as e:
            raise EvaluationError(f"{type(e).__name__}: {e}", section.name) from e

        if not isinstance(rendered, str):
            raise EvaluationError(
                f"Evaluator returned {type(rendered).__name__}, expected str", section.name
            )

        return CompiledSection(section=section, rendered_output=self.output_normalize(rendered))

    def section_compile(self, section: Section) -> str:
        """Evaluate and serialize one section"""
        return self.section_serialize(self.section_evaluate(section))

    @staticmethod
    def output_normalize(output: str) -> str:
        """
        Make output start and end with exactly one newline

        Idempotent. Output that is empty or only newlines becomes "\\n".

        Example:
            "x"         -> "\\nx\\n"
            "\\n\\nx\\n\\n" -> "\\nx\\n"
            ""          -> "\\n"
        """
        body = output.strip("\n")
        if not body:
            return "\n"
        return f"\n{body}\n"

    def section_serialize(self, compiled: CompiledSection) -> str:
        """
        Write a compiled section back as text

        The original program is written, never the templated one, so the
        document stays editable and re-compilable.
        """
        section = compiled.section
        if self.canonical_tags:
            open_tag = self.delimiters.openTag_make(section.name)
            closing_tag = self.delimiters.closeTag_make(section.name)
        else:
            open_tag = f"{self.delimiters.open_marker}{section.header}\n"
            closing_tag = section.closing_tag

        return (
            open_tag
            + section.program
            + self.delimiters.close_marker
            + compiled.rendered_output
            + closing_tag
        )

    def document_reassemble(self, spans: Sequence[Union[LiteralSpan, CompiledSection]]) -> str:
        """Concatenate literal spans and serialized sections in order"""
        return ''.join(
            span.text if isinstance(span, LiteralSpan) else self.section_serialize(span)
            for span in spans
        )


def compile(
    document: str,
    delimiters: DelimiterPair,
    key_resolver: KeyResolver,
    evaluator: Evaluator,
    warning_sink: WarningSink = warning_log,
    max_workers: int = 1,
) -> str:
    """
    Compile document in one call

    Example:
        >>> compile(
        ...     "<!--#ver\\n{{version}}\\n#-->\\nold\\n<!--#/ver #-->",
        ...     DelimiterPair("<!--#", "#-->"),
        ...     lambda section, key: {"version": "1.2.3"}.get(key),
        ...     lambda section, program, stale: program,
        ... )
        '<!--#ver\\n{{version}}\\n#-->\\n1.2.3\\n<!--#/ver #-->'
    """
    return Compiler(
        delimiters,
        key_resolver,
        evaluator,
        warning_sink=warning_sink,
        max_workers=max_workers,
    ).compile(document)
