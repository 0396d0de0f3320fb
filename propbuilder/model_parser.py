"""
model_parser.py

Responsibility: Load a YAML declaration model into `ClassDecl` objects.

This implementation intentionally stays strict: anything outside the
documented shape is rejected with a `ModelError` naming the offending entry,
rather than guessed at.

The processor and CLI should treat the parsed result as the single source of truth.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from propbuilder.declarations import BuilderProperty, ClassDecl, FieldDecl, MethodDecl, Member


class ModelError(ValueError):
    pass


@dataclass(frozen=True)
class DeclarationModel:
    """Parsed model contents: the classes visible to one processing pass."""

    classes: tuple[ClassDecl, ...]
    target: str | None = None


def _required_str(raw: dict[str, Any], key: str, where: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ModelError(f"{where}: `{key}` must be a non-empty string")
    return value.strip()


def _type_text(text: str, where: str) -> str:
    """
    Reject type text whose angle brackets do not balance. This catches a generic
    split at its comma by a flow-style YAML list, e.g. `[Map<K, V>]`.
    """
    depth = 0
    for ch in text:
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
            if depth < 0:
                break
    if depth != 0:
        raise ModelError(
            f"{where}: unbalanced type name {text!r} (write generic types as quoted or block-style list items)"
        )
    return text


def _parse_marker(raw: Any, where: str) -> BuilderProperty | None:
    """
    Accepted forms:
    - absent / false / null: no marker
    - true: marker with derived setter name
    - {setter_name: "..."}: marker with override (empty means derived)
    """
    if raw is None or raw is False:
        return None
    if raw is True:
        return BuilderProperty()
    if isinstance(raw, dict):
        unknown = set(raw) - {"setter_name"}
        if unknown:
            raise ModelError(f"{where}: unknown builder_property keys: {', '.join(sorted(map(str, unknown)))}")
        setter_name = raw.get("setter_name", "")
        if not isinstance(setter_name, str):
            raise ModelError(f"{where}: `builder_property.setter_name` must be a string")
        return BuilderProperty(setter_name=setter_name)
    raise ModelError(f"{where}: `builder_property` must be a boolean or a mapping")


def _parse_member(raw: Any, where: str) -> Member:
    if not isinstance(raw, dict):
        raise ModelError(f"{where}: member must be a mapping")

    kind = raw.get("kind")
    name = _required_str(raw, "name", where)
    where = f"{where} ({name})"
    marker = _parse_marker(raw.get("builder_property"), where)

    if kind == "field":
        return FieldDecl(name=name, type_name=_type_text(_required_str(raw, "type", where), where), marker=marker)

    if kind == "method":
        params_raw = raw.get("parameters") or []
        if not isinstance(params_raw, list):
            raise ModelError(f"{where}: `parameters` must be a list of type names")
        params = []
        for param in params_raw:
            if not isinstance(param, str) or not param.strip():
                raise ModelError(f"{where}: parameter types must be non-empty strings")
            params.append(_type_text(param.strip(), where))
        return MethodDecl(name=name, parameter_types=tuple(params), marker=marker)

    raise ModelError(f"{where}: `kind` must be 'field' or 'method', got {kind!r}")


def _parse_class(raw: Any, index: int) -> ClassDecl:
    if not isinstance(raw, dict):
        raise ModelError(f"classes[{index}]: class must be a mapping")

    qualified_name = _required_str(raw, "name", f"classes[{index}]")
    members_raw = raw.get("members") or []
    if not isinstance(members_raw, list):
        raise ModelError(f"{qualified_name}: `members` must be a list")

    members = [_parse_member(m, f"{qualified_name}.members[{i}]") for i, m in enumerate(members_raw)]
    return ClassDecl(qualified_name=qualified_name, members=members)


def parse_model_text(text: str) -> DeclarationModel:
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ModelError("Model must be a mapping/object at the top level.")

    classes_raw = data.get("classes")
    if not isinstance(classes_raw, list):
        raise ModelError("Model must define a `classes` list.")

    classes: list[ClassDecl] = []
    seen: set[str] = set()
    for index, raw in enumerate(classes_raw):
        cls = _parse_class(raw, index)
        if cls.qualified_name in seen:
            raise ModelError(f"Duplicate class declaration: {cls.qualified_name}")
        seen.add(cls.qualified_name)
        classes.append(cls)

    target = data.get("target")
    if target is not None:
        target = str(target).strip() or None

    return DeclarationModel(classes=tuple(classes), target=target)


def parse_model(model_path: str | Path) -> DeclarationModel:
    """
    Parse a YAML model file into a `DeclarationModel`.

    Expected keys:
    - classes: list (required), each with `name` and `members`
    - target: str (optional output language, overridable from the CLI)
    """
    path = Path(model_path)
    if not path.exists():
        raise ModelError(f"Model file does not exist: {path}")
    try:
        return parse_model_text(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ModelError(f"Invalid YAML in {path}: {e}") from e
