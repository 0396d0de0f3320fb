"""
emitter.py

Responsibility: Deterministically render one builder source file per owning class.

Rules:
- Emission is two-phase: descriptors are classified first, then only the
  resolved ones are rendered.
- Each unresolved descriptor produces exactly one ERROR diagnostic and no method.
- Rendering happens before the artifact is opened, so the writer is only held
  for the write itself.

This module intentionally does NOT know how declarations are scanned or grouped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from propbuilder.artifacts import ArtifactSink
from propbuilder.descriptors import FieldDescriptor
from propbuilder.diagnostics import Messager

log = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

UNRESOLVED_SETTER_MESSAGE = (
    "builder property must be applied to a field with a setter method that takes a single argument."
)


class EmitError(RuntimeError):
    pass


@dataclass(frozen=True)
class Target:
    """An output language: which template to render and which file extension to use."""

    name: str
    template: str
    extension: str


TARGETS: dict[str, Target] = {
    "java": Target(name="java", template="java/Builder.java.j2", extension=".java"),
    "python": Target(name="python", template="python/Builder.py.j2", extension=".py"),
}

DEFAULT_TARGET = "java"


def get_target(name: str) -> Target:
    try:
        return TARGETS[name]
    except KeyError:
        known = ", ".join(sorted(TARGETS))
        raise EmitError(f"Unknown target: {name!r} (expected one of: {known})") from None


def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    # Type text may come from any language (e.g. `java.util.List<T>`, `int[]`),
    # so Python annotations are emitted as string literals.
    env.filters["pyrepr"] = repr
    return env


@dataclass(frozen=True)
class BuilderSpec:
    """All descriptors of one owning class, split into resolved and unresolved."""

    class_qualified_name: str
    class_simple_name: str
    package_name: str | None
    properties: tuple[FieldDescriptor, ...]
    unresolved: tuple[FieldDescriptor, ...]

    @property
    def builder_simple_name(self) -> str:
        return self.class_simple_name + "Builder"

    @property
    def builder_qualified_name(self) -> str:
        return self.class_qualified_name + "Builder"


def classify(group: Sequence[FieldDescriptor]) -> BuilderSpec:
    if not group:
        raise EmitError("Cannot build a builder from an empty descriptor group")
    first = group[0]
    return BuilderSpec(
        class_qualified_name=first.owner_qualified_name,
        class_simple_name=first.owner_simple_name,
        package_name=first.owner_package_name,
        properties=tuple(d for d in group if d.is_resolved),
        unresolved=tuple(d for d in group if not d.is_resolved),
    )


def render_builder(spec: BuilderSpec, target: Target) -> str:
    """
    Render the builder source for `spec`. The text depends only on its inputs.
    """
    properties = [
        {
            "builder_method_name": d.builder_method_name,
            "declared_type_name": d.declared_type_name,
            # Invoke the setter by its declared name; the override may differ in case.
            "setter_method_name": d.resolved_setter.name,
        }
        for d in spec.properties
    ]
    try:
        template = _environment().get_template(target.template)
        return template.render(
            package_name=spec.package_name,
            class_name=spec.class_simple_name,
            builder_name=spec.builder_simple_name,
            properties=properties,
        )
    except TemplateError as e:
        raise EmitError(f"Failed rendering {target.template} for {spec.class_qualified_name}") from e


def emit_builder(
    group: Sequence[FieldDescriptor],
    *,
    artifacts: ArtifactSink,
    messager: Messager,
    target: Target,
) -> str:
    """
    Report unresolved descriptors, render the builder and write it to `artifacts`.

    Returns the builder's fully qualified name. `OSError` from the sink propagates.
    """
    spec = classify(group)
    for descriptor in spec.unresolved:
        messager.error(UNRESOLVED_SETTER_MESSAGE, descriptor.element)

    source = render_builder(spec, target)
    with artifacts.create_source_file(spec.builder_qualified_name) as out:
        out.write(source)

    log.info(
        "Generated %s (%d setter(s), %d skipped)",
        spec.builder_qualified_name,
        len(spec.properties),
        len(spec.unresolved),
    )
    return spec.builder_qualified_name
