"""
Centralized logging using Loguru with context-aware verbosity.

This module provides a LOG() function that respects the current ProgramState's
verbosity level without requiring explicit state passing, plus the warning
sinks handed to the compiler.

Features:
- Context-aware logging tied to ProgramState verbosity
- Rich formatting with timestamps, colors, and metadata
- Thread-safe using contextvars
- Works throughout lib modules without passing state

Usage:
    from lib.log import LOG, state_connectToLogger

    # At start of pipeline function:
    state_connectToLogger(state)

    # Anywhere in that context:
    LOG("This message appears if verbosity >= 1", level=1)
    LOG("Debug details appear if verbosity >= 2", level=2)
    LOG("Verbose trace appears if verbosity >= 3", level=3)
"""

from loguru import logger
from typing import Any, Callable, List, Optional
from contextvars import ContextVar
import sys
import threading

# Context variable to hold current ProgramState
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

# Configure loguru with freshmark-specific format
logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <7}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()  # Remove default handler
logger.add(sys.stderr, format=logger_format, level="DEBUG")


WarningSink = Callable[[str], None]


def state_connectToLogger(state: Any) -> None:
    """
    Connect a ProgramState to the logging context.

    Call this at the start of the pipeline to make the state's verbosity
    setting available to LOG() calls throughout that context.

    Args:
        state: ProgramState instance with verbosity attribute
    """
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if current state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        **kwargs: Additional loguru metadata

    Example:
        LOG("Compiled README.md", level=1)
        LOG("Compiling section 'badges'", level=2)
        LOG("Section 'badges' spans 120..480", level=3)
    """
    state = _program_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        logger.opt(depth=1).debug(message, **kwargs)


def warning_log(message: str) -> None:
    """Default warning sink: forward to loguru at WARNING level"""
    logger.opt(depth=1).warning(message)


class WarningCollector:
    """
    Append-only, lock-protected warning sink

    Safe to share between sections evaluated on parallel workers. Order
    across sections is whatever order the workers reported in.

    Example:
        >>> warnings = WarningCollector()
        >>> warnings("Unknown key 'version'")
        >>> warnings.messages
        ["Unknown key 'version'"]
    """

    def __init__(self, forward: Optional[WarningSink] = None) -> None:
        self._lock = threading.Lock()
        self._messages: List[str] = []
        self.forward = forward

    def __call__(self, message: str) -> None:
        with self._lock:
            self._messages.append(message)
        if self.forward is not None:
            self.forward(message)

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)

    @property
    def messages(self) -> List[str]:
        with self._lock:
            return list(self._messages)
