"""Command-line viewer for solver counterexamples."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from cexmodel.errors import ModelError
from cexmodel.model import HeapLocation, Model
from cexmodel.options import Options
from cexmodel.render import to_display, to_source
from cexmodel.values import Value


def read_model_text(source: str) -> str:
    """Read solver output from a file path, or stdin for '-'."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def format_variables(
    model: Model,
    names: list[str] | None = None,
    heap: int | None = None,
    fmt: str = "display",
) -> list[str]:
    """Render the requested variables as ``name = value`` lines.

    Args:
        model: The decoded model.
        names: Variables to show; all known variables when None.
        heap: Heap generation for mutable variables; the latest when None.
        fmt: "display" for readable text, "source" for JavaScript source.
    """
    render = to_source if fmt == "source" else to_display
    mutable = model.mutable_variables()
    if heap is None:
        generations = model.heap_generations()
        heap = generations[-1] if generations else 0

    lines = []
    for name in names if names is not None else sorted(model.variables()):
        value: Value
        if name in mutable:
            value = model.value_of(HeapLocation(name, heap))
        else:
            value = model.value_of(name)
        lines.append(f"{name} = {render(value)}")
    return lines


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    arg_parser = argparse.ArgumentParser(
        description="Show the counterexample values in an SMT solver model"
    )
    arg_parser.add_argument(
        "model",
        type=str,
        help="File containing the solver output, or '-' for stdin",
    )
    arg_parser.add_argument(
        "-n", "--name",
        action="append",
        dest="names",
        help="Variable to show (repeatable; default: all variables)",
    )
    arg_parser.add_argument(
        "--heap",
        type=int,
        default=None,
        help="Heap generation for mutable variables (default: latest)",
    )
    arg_parser.add_argument(
        "--format",
        choices=["display", "source"],
        default="display",
        help="Render values as readable text or JavaScript source",
    )
    arg_parser.add_argument(
        "--filename",
        type=str,
        default="",
        help="Verified source file, reported in error locations",
    )
    arg_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log decoding details",
    )

    args = arg_parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.model != "-" and not Path(args.model).exists():
        print(f"Error: File not found: {args.model}", file=sys.stderr)
        return 1

    try:
        model = Model(read_model_text(args.model), Options(filename=args.filename))
        for line in format_variables(model, args.names, args.heap, args.format):
            print(line)
    except ModelError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
