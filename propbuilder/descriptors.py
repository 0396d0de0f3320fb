"""
descriptors.py

Responsibility: Turn one marked field into a `FieldDescriptor`.

Descriptor construction never fails for a well-formed field: a missing setter
is carried as `resolved_setter=None` and reported later, at emission time.
"""

from __future__ import annotations

from dataclasses import dataclass

from propbuilder.declarations import BuilderProperty, ClassDecl, FieldDecl, MethodDecl


def capitalize(name: str) -> str:
    """Uppercase the first character only; `str.capitalize` would lowercase the rest."""
    return name[:1].upper() + name[1:]


def derive_setter_name(field_name: str, marker: BuilderProperty | None = None) -> str:
    override = (marker.setter_name if marker is not None else "").strip()
    if override:
        return override
    return "set" + capitalize(field_name)


def _is_setter_candidate(method: MethodDecl, setter_name: str, type_name: str) -> bool:
    return method.name.lower() == setter_name.lower() and method.parameter_types == (type_name,)


def resolve_setter(owner: ClassDecl, setter_name: str, type_name: str) -> MethodDecl | None:
    """
    Find the setter for a field among the methods declared directly on `owner`.

    Names compare case-insensitively; the sole parameter type must equal
    `type_name` as text. When several methods qualify, the first one declared wins.
    """
    for method in owner.methods:
        if _is_setter_candidate(method, setter_name, type_name):
            return method
    return None


@dataclass(frozen=True)
class FieldDescriptor:
    element: FieldDecl
    field_name: str
    declared_type_name: str
    setter_name: str
    owner_qualified_name: str
    owner_simple_name: str
    owner_package_name: str | None
    resolved_setter: MethodDecl | None = None

    @property
    def is_resolved(self) -> bool:
        return self.resolved_setter is not None

    @property
    def builder_method_name(self) -> str:
        # The builder side always uses the derived name, even with an override.
        return "set" + capitalize(self.field_name)


def build_descriptor(element: FieldDecl) -> FieldDescriptor:
    owner = element.enclosing
    if owner is None:
        raise ValueError(f"Field {element.name!r} is not enclosed by a class declaration")

    setter_name = derive_setter_name(element.name, element.marker)
    return FieldDescriptor(
        element=element,
        field_name=element.name,
        declared_type_name=element.type_name,
        setter_name=setter_name,
        owner_qualified_name=owner.qualified_name,
        owner_simple_name=owner.simple_name,
        owner_package_name=owner.package_name,
        resolved_setter=resolve_setter(owner, setter_name, element.type_name),
    )
