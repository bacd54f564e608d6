"""
Models package for freshmark

Contains data structures and type definitions for the compilation pipeline.
"""

from .state import ProgramState, pipeline
from .delimiters import DelimiterPair
from .sections import LiteralSpan, Section, CompiledSection, DocumentPart
from .helpers import HelperSpec, HelperCategory

__all__ = [
    "ProgramState",
    "pipeline",
    "DelimiterPair",
    "LiteralSpan",
    "Section",
    "CompiledSection",
    "DocumentPart",
    "HelperSpec",
    "HelperCategory",
]
