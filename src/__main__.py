#!/usr/bin/env python3
"""
freshmark - Regenerate script-generated regions inside comment blocks

Compiles one document from an input directory into an output directory,
re-running every embedded section program and replacing its stale output.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Philosophy:
    - Source of truth stays in the document: programs live in comments
    - Everything outside a section is left byte-for-byte untouched
    - Re-running on compiled output changes nothing

Usage:
    freshmark inputdir/ outputdir/ --inputFile README.md --properties project.yaml

    The compiled document is written to outputdir/ under the same name.

Examples:
    # Basic compilation
    freshmark . out/ --inputFile README.md --set version=1.2.3

    # Update in place
    freshmark . . --inputFile README.md --properties project.yaml

    # Fail (exit 1) when the document is out of date, write nothing
    freshmark . . --inputFile README.md --properties project.yaml --check
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter
from typing import Dict, List

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import (
    FreshMark,
    Properties,
    FreshmarkError,
    WarningCollector,
    warning_log,
    __version__,
    LOG,
    state_connectToLogger,
)
from .models import DelimiterPair, ProgramState, pipeline


DISPLAY_TITLE = r"""
   __               _                          _
  / _|_ __ ___  ___| |__  _ __ ___   __ _ _ __| | __
 | |_| '__/ _ \/ __| '_ \| '_ ` _ \ / _` | '__| |/ /
 |  _| | |  __/\__ \ | | | | | | | | (_| | |  |   <
 |_| |_|  \___||___/_| |_|_| |_| |_|\__,_|_|  |_|\_\

  Regenerate generated regions inside comment blocks
"""

# Define CLI arguments
parser = ArgumentParser(
    description="freshmark - regenerate script-generated regions inside comment blocks",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Document to compile (relative to inputdir)"
)

parser.add_argument(
    "--properties",
    default=None,
    type=str,
    help="YAML property file (relative to inputdir)",
)

parser.add_argument(
    "--set",
    action="append",
    default=None,
    metavar="KEY=VALUE",
    help="Property override, can be repeated",
)

parser.add_argument(
    "--openMarker",
    default=None,
    type=str,
    help=f"Section open-marker (default: {appsettings.open_marker!r})",
)

parser.add_argument(
    "--closeMarker",
    default=None,
    type=str,
    help=f"Section close-marker (default: {appsettings.close_marker!r})",
)

parser.add_argument(
    "--workers",
    default=None,
    type=int,
    help=f"Sections evaluated concurrently (default: {appsettings.max_workers})",
)

parser.add_argument(
    "--check",
    action="store_true",
    help="Do not write; exit 1 if the document is out of date",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def assignments_parse(assignments: List[str]) -> Dict[str, str]:
    """
    Parse KEY=VALUE strings into a dict

    Raises:
        ValueError: An assignment has no '=' or an empty key
    """
    values = {}
    for assignment in assignments:
        key, sep, value = assignment.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected KEY=VALUE, got {assignment!r}")
        values[key] = value
    return values


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the input document
            - outputFile: Path the compiled document is written to
            - envOK: True if environment is valid

    Exits:
        1 if the input document or property file is not found
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile
    if not input_file.is_file():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    if state.properties and not (state.inputdir / state.properties).is_file():
        print(f"Error: Property file not found: {state.inputdir / state.properties}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.outputFile = state.outputdir / state.inputFile
    if not state.check:
        state.outputFile.parent.mkdir(parents=True, exist_ok=True)
    LOG(f"Output file: {state.outputFile}", level=2)

    state.envOK = True
    return state


def properties_load(inputstate: ProgramState) -> ProgramState:
    """
    Build the property table from the property file and --set overrides.

    Returns:
        ProgramState with added field:
            - propertyTable: Dict of property values

    Exits:
        1 if the property file is invalid or an override is malformed
    """

    state = inputstate.copy()

    properties = Properties()
    if state.properties:
        property_file = state.inputdir / state.properties
        LOG(f"Loading properties from {property_file}", level=1)
        try:
            properties = Properties.from_yaml(property_file)
        except FreshmarkError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

    try:
        overrides = assignments_parse(state.set)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    for key in overrides:
        if key in properties:
            LOG(f"--set {key} overrides the property file value", level=2)
    properties = properties.merged(**overrides)
    state.propertyTable = properties.values
    LOG(f"Loaded {len(properties)} properties", level=2)
    return state


def document_compile(inputstate: ProgramState) -> ProgramState:
    """
    Compile the document and write (or check) the result.

    CRLF newlines are converted to LF before compiling and restored when
    writing, so the compiler only ever sees line-feed newlines.

    Returns:
        ProgramState with added field:
            - compileResult: Dict containing:
                - status: bool (compilation success)
                - changed: bool (output differs from input)
                - output_file: str (path written, or that would be written)
                - warnings: List[str] (unknown-key diagnostics)

    Exits:
        1 on parse/evaluation errors, or unknown keys in strict mode
    """

    state = inputstate.copy()

    LOG("Compiling document...", level=1)

    try:
        raw = state.inputSourceFile.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    crlf = "\r\n" in raw
    document = raw.replace("\r\n", "\n")
    LOG(f"Read {len(document)} characters from {state.inputSourceFile.name}", level=2)

    warnings = WarningCollector(forward=warning_log)
    freshmark = FreshMark(
        state.propertyTable or {},
        warning_sink=warnings,
        delimiters=DelimiterPair(
            state.openMarker or appsettings.open_marker,
            state.closeMarker or appsettings.close_marker,
        ),
        max_workers=state.workers,
    )

    if state.verbosity >= 3:
        LOG("Helpers available to section programs:", level=3)
        for line in freshmark.evaluator.registry.helpers_describe():
            LOG(line, level=3)

    try:
        compiled = freshmark.compile(document)
    except FreshmarkError as e:
        print(f"Compilation error in {state.inputSourceFile}: {e}", file=sys.stderr)
        if state.verbosity >= 3:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    if appsettings.strict_mode and len(warnings):
        print(f"Error: {len(warnings)} unknown key(s) in strict mode", file=sys.stderr)
        sys.exit(1)

    if crlf:
        compiled = compiled.replace("\n", "\r\n")
    changed = compiled != raw

    if not state.check:
        state.outputFile.write_text(compiled, encoding="utf-8", newline="")
        LOG(f"Wrote {state.outputFile}", level=2)

    state.compileResult = {
        "status": True,
        "changed": changed,
        "output_file": str(state.outputFile),
        "warnings": warnings.messages,
    }
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display compilation results to the user.

    Exits:
        1 if compileResult is None, or in --check mode when the document
        is out of date
    """
    state: ProgramState = inputstate.copy()
    if not state.compileResult:
        print("Error: Compilation failed", file=sys.stderr)
        sys.exit(1)

    result = state.compileResult
    if state.check:
        if result["changed"]:
            print(f"{state.inputSourceFile} is out of date", file=sys.stderr)
            sys.exit(1)
        LOG(f"✓ {state.inputSourceFile} is up to date", level=1)
        return state

    LOG("✓ Compilation successful!", level=1)
    LOG(f"  Output: {result['output_file']}", level=1)
    LOG(f"  Changed: {'yes' if result['changed'] else 'no'}", level=1)
    if result["warnings"]:
        LOG(f"  Warnings: {len(result['warnings'])}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="freshmark - regenerate generated regions in documents",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - compile one document from inputdir into outputdir.

    Orchestrates the pipeline:
        1. env_check: Validate paths
        2. properties_load: Read property file and overrides
        3. document_compile: Compile and write (or check) the document
        4. results_report: Display results to user

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, properties_load, document_compile, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
