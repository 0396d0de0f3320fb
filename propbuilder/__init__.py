"""
propbuilder package

This package generates builder classes for fields marked as builder properties.

Key responsibilities are split across modules:
- `declarations.py`: the class / field / method declaration model and the marker
- `model_parser.py`: parse a YAML declaration model into declarations
- `descriptors.py`: per-field descriptors, setter-name derivation and setter resolution
- `emitter.py`: deterministic Jinja2 rendering of one builder per owning class
- `processor.py`: one processing pass (scan -> describe -> group -> emit)
- `artifacts.py` / `diagnostics.py`: output files and build-time diagnostics
- `cli.py`: CLI entrypoint
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
