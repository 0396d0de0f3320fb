"""Shared model classes and declarations for the builder tests."""

from __future__ import annotations

from typing import Any

from propbuilder.declarations import BuilderProperty, ClassDecl, FieldDecl, MethodDecl


class Person:
    def __init__(self) -> None:
        self.name = None

    def setName(self, name: str) -> None:
        self.name = name


class Animal:
    def __init__(self) -> None:
        self.name = None
        self.canFly = False

    def setName(self, name: str) -> None:
        self.name = name

    def setCanFly(self, can_fly: bool) -> None:
        self.canFly = can_fly


def person_decl(qualified_name: str = "Person", type_name: str = "str") -> ClassDecl:
    return ClassDecl(
        qualified_name,
        [
            FieldDecl("name", type_name, marker=BuilderProperty()),
            MethodDecl("getName"),
            MethodDecl("setName", (type_name,)),
        ],
    )


def animal_decl(qualified_name: str = "Animal") -> ClassDecl:
    return ClassDecl(
        qualified_name,
        [
            FieldDecl("name", "str", marker=BuilderProperty()),
            FieldDecl("canFly", "bool", marker=BuilderProperty()),
            MethodDecl("setName", ("str",)),
            MethodDecl("setCanFly", ("bool",)),
        ],
    )


def exec_builder(source: str, **names: Any) -> dict[str, Any]:
    """Execute generated Python builder source with `names` bound as globals."""
    namespace: dict[str, Any] = dict(names)
    exec(compile(source, "<generated>", "exec"), namespace)
    return namespace
