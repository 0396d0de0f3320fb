"""
processor.py

Responsibility: Run one processing pass over a set of class declarations.

High-level flow:
1) Scan: collect every field carrying the builder-property marker
2) Describe: build one `FieldDescriptor` per marked field
3) Group: partition descriptors by owning class, in first-occurrence order
4) Emit: render and write one builder per group

A processor keeps no state between passes; running `process` twice over the
same declarations writes identical artifacts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from propbuilder.artifacts import ArtifactSink
from propbuilder.declarations import ClassDecl, FieldDecl, iter_elements
from propbuilder.descriptors import FieldDescriptor, build_descriptor
from propbuilder.diagnostics import Messager
from propbuilder.emitter import DEFAULT_TARGET, Target, emit_builder, get_target

log = logging.getLogger(__name__)


def scan_marked_fields(classes: Iterable[ClassDecl]) -> list[FieldDecl]:
    """Marked fields only; markers on other element kinds are ignored."""
    return [e for e in iter_elements(classes) if isinstance(e, FieldDecl) and e.marker is not None]


def group_by_owner(descriptors: Iterable[FieldDescriptor]) -> dict[str, list[FieldDescriptor]]:
    groups: dict[str, list[FieldDescriptor]] = {}
    for descriptor in descriptors:
        groups.setdefault(descriptor.owner_qualified_name, []).append(descriptor)
    return groups


@dataclass(frozen=True)
class ProcessResult:
    generated: tuple[str, ...]
    failed: tuple[str, ...]


class BuilderPropertyProcessor:
    def __init__(
        self,
        *,
        artifacts: ArtifactSink,
        messager: Messager,
        target: Target | str = DEFAULT_TARGET,
    ) -> None:
        self._artifacts = artifacts
        self._messager = messager
        self._target = get_target(target) if isinstance(target, str) else target

    @property
    def target(self) -> Target:
        return self._target

    def process(self, classes: Sequence[ClassDecl]) -> ProcessResult:
        fields = scan_marked_fields(classes)
        descriptors = [build_descriptor(f) for f in fields]
        groups = group_by_owner(descriptors)
        log.debug("Found %d marked field(s) across %d class(es)", len(fields), len(groups))

        generated: list[str] = []
        failed: list[str] = []
        for owner, group in groups.items():
            try:
                generated.append(
                    emit_builder(group, artifacts=self._artifacts, messager=self._messager, target=self._target)
                )
            except OSError as e:
                # One failing artifact must not stop the other classes.
                self._messager.error(f"Could not write builder for {owner}: {e}")
                failed.append(owner)

        return ProcessResult(generated=tuple(generated), failed=tuple(failed))
