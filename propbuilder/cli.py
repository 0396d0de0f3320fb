"""
cli.py

Responsibility: CLI entrypoint for propbuilder.

High-level flow (single command `generate`):
1) Parse the YAML declaration model -> `DeclarationModel`
2) Run one processing pass -> builder sources
3) Write builders to a directory (or stdout) and report diagnostics

This module should orchestrate behavior but keep concerns isolated:
- Model parsing: `model_parser.py`
- Descriptors and grouping: `descriptors.py`, `processor.py`
- Rendering: `emitter.py`
- Output: `artifacts.py`
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from propbuilder.artifacts import DirectoryArtifactSink, MemoryArtifactSink
from propbuilder.diagnostics import Messager
from propbuilder.emitter import DEFAULT_TARGET, TARGETS, EmitError, get_target
from propbuilder.model_parser import ModelError, parse_model
from propbuilder.processor import BuilderPropertyProcessor

log = logging.getLogger(__name__)


class CLIError(RuntimeError):
    pass


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def generate_cmd(args: argparse.Namespace) -> int:
    model = parse_model(args.model_path)

    # CLI overrides
    target_name = args.target or model.target or DEFAULT_TARGET
    try:
        target = get_target(target_name)
    except EmitError as e:
        raise CLIError(str(e)) from e

    messager = Messager()
    if args.stdout:
        sink = MemoryArtifactSink()
    else:
        sink = DirectoryArtifactSink(Path(args.out).resolve(), target.extension)
    log.debug("Processing %d class(es) for target %s", len(model.classes), target.name)

    processor = BuilderPropertyProcessor(artifacts=sink, messager=messager, target=target)
    result = processor.process(model.classes)

    if isinstance(sink, MemoryArtifactSink):
        for name in result.generated:
            sys.stdout.write(f"// {name}\n" if target.name == "java" else f"# {name}\n")
            sys.stdout.write(sink.files[name])

    for diagnostic in messager.diagnostics:
        print(diagnostic.format(), file=sys.stderr)

    errors = len(messager.errors)
    print(
        f"Generated {len(result.generated)} builder(s), {errors} error(s)",
        file=sys.stderr,
    )
    return 1 if messager.has_errors else 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="propbuilder", description="propbuilder - builder class generator")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    g = sub.add_parser("generate", help="Generate builder classes from a declaration model")
    g.add_argument("model_path", help="Path to the YAML declaration model")
    g.add_argument("--out", default="generated", help="Output directory (default: generated)")
    g.add_argument(
        "--target",
        default=None,
        choices=sorted(TARGETS),
        help=f"Output language (overrides the model's target; default: {DEFAULT_TARGET})",
    )
    g.add_argument("--stdout", action="store_true", help="Print generated sources instead of writing files")

    g.set_defaults(func=generate_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(bool(args.verbose))
    try:
        return int(args.func(args))
    except (ModelError, CLIError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
