"""
freshmark - Regenerate script-generated regions inside comment blocks

Keeps generated badges, links and tables in a document in sync with
project metadata.
"""

__version__ = "1.0.0"

from .parser import Parser, parse
from .compiler import Compiler, compile
from .evaluator import Evaluator, PythonEvaluator
from .helpers import HelperRegistry
from .properties import Properties
from .freshmark import FreshMark
from .template import substitute, placeholders_find
from .errors import (
    FreshmarkError,
    ParseError,
    MismatchedSectionName,
    UnterminatedSection,
    InvalidSectionName,
    UnexpectedClosingTag,
    EvaluationError,
    PropertiesError,
)
from .log import LOG, state_connectToLogger, warning_log, WarningCollector

__all__ = [
    "Parser",
    "parse",
    "Compiler",
    "compile",
    "Evaluator",
    "PythonEvaluator",
    "HelperRegistry",
    "Properties",
    "FreshMark",
    "substitute",
    "placeholders_find",
    "FreshmarkError",
    "ParseError",
    "MismatchedSectionName",
    "UnterminatedSection",
    "InvalidSectionName",
    "UnexpectedClosingTag",
    "EvaluationError",
    "PropertiesError",
    "LOG",
    "state_connectToLogger",
    "warning_log",
    "WarningCollector",
    "__version__",
]
