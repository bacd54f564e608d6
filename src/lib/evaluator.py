"""
Section program evaluators

The compiler never runs program text itself: it calls an Evaluator with
(section name, templated program, stale output) and gets back the
rendered output. Any callable with that signature works.

PythonEvaluator is the default. It runs a program as Python source in a
fresh namespace built per section by a context factory:

    output = link(shield('Latest', 'latest', '{{version}}', 'blue'), '{{url}}')

Inside the program, `input` holds the stale output and the program must
bind `output` to a string.
"""

from typing import Any, Callable, Dict, Mapping, Optional, Protocol

from .errors import EvaluationError
from .helpers import HelperRegistry
from .log import LOG

INPUT_NAME = "input"
OUTPUT_NAME = "output"

ContextFactory = Callable[[str], Dict[str, Any]]


class Evaluator(Protocol):
    """Renders one section's program into output text"""

    def __call__(self, section: str, program: str, stale_output: str) -> str:
        ...


class PythonEvaluator:
    """
    Evaluates section programs as Python source

    Every call gets its own namespace from context_create(), so nothing a
    program binds can leak into another section.

    Attributes:
        properties: Values bound as variables (identifier-valid keys only)
        registry: Helpers bound as functions
        context_factory: Optional extra per-section bindings, applied last
    """

    def __init__(
        self,
        properties: Optional[Mapping[str, Any]] = None,
        registry: Optional[HelperRegistry] = None,
        context_factory: Optional[ContextFactory] = None,
    ) -> None:
        self.properties = dict(properties or {})
        self.registry = registry if registry is not None else HelperRegistry()
        self.context_factory = context_factory

    def context_create(self, section: str) -> Dict[str, Any]:
        """
        Build a fresh evaluation namespace for one section

        Args:
            section: Name of the section about to be evaluated

        Returns:
            New dict holding properties, helpers and any factory bindings
        """
        context: Dict[str, Any] = {
            key: value for key, value in self.properties.items()
            if isinstance(key, str) and key.isidentifier()
        }
        context.update(self.registry.namespace_build())
        if self.context_factory is not None:
            context.update(self.context_factory(section))
        return context

    def __call__(self, section: str, program: str, stale_output: str) -> str:
        namespace = self.context_create(section)
        namespace[INPUT_NAME] = stale_output

        try:
            code = compile(program, f"<freshmark section '{section}'>", "exec")
        except SyntaxError as e:
            raise EvaluationError(f"Program does not compile: {e}", section) from e

        LOG(f"Executing program of section '{section}'", level=3)
        try:
            exec(code, namespace)
        except Exception as e:
            raise EvaluationError(f"Program raised {type(e).__name__}: {e}", section) from e

        if OUTPUT_NAME not in namespace:
            raise EvaluationError(f"Program did not assign '{OUTPUT_NAME}'", section)
        output = namespace[OUTPUT_NAME]
        if not isinstance(output, str):
            raise EvaluationError(
                f"Program assigned '{OUTPUT_NAME}' a {type(output).__name__}, expected str",
                section,
            )
        return output
