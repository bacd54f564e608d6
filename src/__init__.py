"""
freshmark - Regenerate script-generated regions inside comment blocks

Each block pairs a short program with the output it last produced;
compiling a document re-runs every program and replaces the stale output.
"""

__version__ = "1.0.0"

from .lib import (
    Parser,
    Compiler,
    compile,
    FreshMark,
    Properties,
    PythonEvaluator,
    HelperRegistry,
    ParseError,
    MismatchedSectionName,
    UnterminatedSection,
    InvalidSectionName,
    UnexpectedClosingTag,
    EvaluationError,
    LOG,
    state_connectToLogger,
    WarningCollector,
)
from .models import DelimiterPair, Section, LiteralSpan

__all__ = [
    "Parser",
    "Compiler",
    "compile",
    "FreshMark",
    "Properties",
    "PythonEvaluator",
    "HelperRegistry",
    "ParseError",
    "MismatchedSectionName",
    "UnterminatedSection",
    "InvalidSectionName",
    "UnexpectedClosingTag",
    "EvaluationError",
    "LOG",
    "state_connectToLogger",
    "WarningCollector",
    "DelimiterPair",
    "Section",
    "LiteralSpan",
    "__version__",
]
