"""
diagnostics.py

Responsibility: Collect build-time diagnostics raised during a processing pass.

Every diagnostic is recorded in order and mirrored to the module logger, so a
CLI run shows it both in the summary and in the log stream.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from propbuilder.declarations import Element

log = logging.getLogger(__name__)


class Kind(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"


_LOG_LEVELS = {
    Kind.ERROR: logging.ERROR,
    Kind.WARNING: logging.WARNING,
    Kind.NOTE: logging.INFO,
}


@dataclass(frozen=True)
class Diagnostic:
    kind: Kind
    message: str
    element: Element | None = None

    def format(self) -> str:
        if self.element is None:
            return f"{self.kind.value}: {self.message}"
        return f"{self.kind.value}: {self.element.qualified_name}: {self.message}"


class Messager:
    def __init__(self) -> None:
        self._diagnostics: list[Diagnostic] = []

    def print_message(self, kind: Kind, message: str, element: Element | None = None) -> Diagnostic:
        diagnostic = Diagnostic(kind=kind, message=message, element=element)
        self._diagnostics.append(diagnostic)
        log.log(_LOG_LEVELS[kind], diagnostic.format())
        return diagnostic

    def error(self, message: str, element: Element | None = None) -> Diagnostic:
        return self.print_message(Kind.ERROR, message, element)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return list(self._diagnostics)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self._diagnostics if d.kind is Kind.ERROR]

    @property
    def has_errors(self) -> bool:
        return any(d.kind is Kind.ERROR for d in self._diagnostics)
