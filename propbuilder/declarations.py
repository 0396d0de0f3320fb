"""
declarations.py

Responsibility: The declaration model a processing pass works on.

Elements are a tagged variant:
- `FieldDecl`: a field with its type text and optional builder-property marker
- `MethodDecl`: a method with its parameter type texts
- `ClassDecl`: a class owning an ordered list of fields and methods

`ClassDecl` links every member's `enclosing` back to itself, so a field can
always reach its declaring class.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Union


@dataclass(frozen=True)
class BuilderProperty:
    """Marker placed on fields that take part in a generated builder."""

    setter_name: str = ""


@dataclass
class FieldDecl:
    name: str
    type_name: str
    marker: BuilderProperty | None = None
    enclosing: ClassDecl | None = field(default=None, repr=False, compare=False)

    @property
    def qualified_name(self) -> str:
        if self.enclosing is None:
            return self.name
        return f"{self.enclosing.qualified_name}.{self.name}"


@dataclass
class MethodDecl:
    name: str
    parameter_types: tuple[str, ...] = ()
    marker: BuilderProperty | None = None
    enclosing: ClassDecl | None = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.parameter_types = tuple(self.parameter_types)

    @property
    def qualified_name(self) -> str:
        params = ", ".join(self.parameter_types)
        if self.enclosing is None:
            return f"{self.name}({params})"
        return f"{self.enclosing.qualified_name}.{self.name}({params})"


Member = Union[FieldDecl, MethodDecl]


@dataclass
class ClassDecl:
    qualified_name: str
    members: list[Member] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.members = list(self.members)
        for member in self.members:
            member.enclosing = self

    @property
    def simple_name(self) -> str:
        return self.qualified_name.rpartition(".")[2]

    @property
    def package_name(self) -> str | None:
        """Namespace of the class, or None when it is unnamespaced."""
        package, dot, _ = self.qualified_name.rpartition(".")
        return package if dot and package else None

    @property
    def fields(self) -> list[FieldDecl]:
        return [m for m in self.members if isinstance(m, FieldDecl)]

    @property
    def methods(self) -> list[MethodDecl]:
        return [m for m in self.members if isinstance(m, MethodDecl)]


Element = Union[ClassDecl, FieldDecl, MethodDecl]


def iter_elements(classes: Iterable[ClassDecl]) -> Iterator[Element]:
    """
    Yield every element visible in a pass: each class followed by its members,
    in declaration order.
    """
    for cls in classes:
        yield cls
        yield from cls.members
