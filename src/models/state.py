"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

import dataclasses
from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Dict, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the CLI pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the run progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, properties,
                   set, openMarker, closeMarker, workers, check
        - env_check: inputSourceFile, outputFile, envOK
        - properties_load: propertyTable
        - document_compile: compileResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the source document
        outputdir: Base output directory for the compiled document
        verbosity: Logging verbosity level (1-3)
        inputFile: Document filename (relative to inputdir)
        properties: Optional YAML property file (relative to inputdir)
        set: Inline KEY=VALUE property overrides
        openMarker: Open-marker override (None uses settings)
        closeMarker: Close-marker override (None uses settings)
        workers: Concurrent section evaluations (None uses settings)
        check: Report staleness instead of writing output
        envOK: Environment validation passed
        inputSourceFile: Resolved path to the input document
        outputFile: Resolved path of the compiled document
        propertyTable: Merged property values
        compileResult: Compilation results (status, changed, warnings, ...)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    properties: Optional[str] = field(default=None)
    set: List[str] = field(default_factory=list)
    openMarker: Optional[str] = field(default=None)
    closeMarker: Optional[str] = field(default=None)
    workers: Optional[int] = field(default=None)
    check: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    outputFile: Path = field(default=Path("/"))
    propertyTable: Optional[Dict[str, Any]] = field(default=None)
    compileResult: Optional[Dict] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (inputFile, properties, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for compilation output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        # Only keep options that exist as ProgramState fields
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}
        if filtered_options.get("set") is None:
            filtered_options["set"] = []

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            properties_load,
            document_compile,
            results_report
        )

    This is equivalent to:
        results_report(document_compile(properties_load(env_check(initial_state))))
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
