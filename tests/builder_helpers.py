from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fluentgen.synthesis.generator import BuilderSynthesizer
from fluentgen.synthesis.model import FieldDecl, RecordSchema


def req(name: str, hint: str = "object") -> FieldDecl:
    return FieldDecl(name=name, type_hint=hint, required=True)


def opt(name: str, hint: str = "object") -> FieldDecl:
    return FieldDecl(name=name, type_hint=hint)


def exc(name: str, hint: str = "object") -> FieldDecl:
    return FieldDecl(name=name, type_hint=hint, excluded=True)


def record(name: str, *fields: FieldDecl, scope: str = "", kind: str = "record") -> RecordSchema:
    return RecordSchema(name=name, fields=tuple(fields), scope=scope, kind=kind)


def load_builder(
    schema: RecordSchema,
    target: type,
    synthesizer: BuilderSynthesizer | None = None,
) -> Any:
    """Generate the builder module for ``schema`` and execute it.

    ``target`` is placed in the module namespace under the record name, so
    schemas with an empty scope resolve it without an import.
    """
    unit = (synthesizer or BuilderSynthesizer()).generate(schema)
    namespace: dict[str, Any] = {"__name__": f"generated_{unit.module_name}", schema.name: target}
    exec(compile(unit.code, f"<{unit.module_name}>", "exec"), namespace)
    return namespace[unit.builder_name]


@dataclass(frozen=True)
class Pair:
    a: Any
    b: Any


@dataclass(frozen=True)
class Note:
    id: int
    note: str | None
    secret: int


@dataclass(frozen=True)
class Person:
    first_name: str
    last_name: str
    age: int
    email: str | None
    phone_number: str | None
    address: str | None
    internal_id: str | None


@dataclass(frozen=True)
class Settings:
    verbose: bool
    retries: int


@dataclass(frozen=True)
class Empty:
    pass


PERSON_SCHEMA = record(
    "Person",
    req("first_name", "str"),
    req("last_name", "str"),
    req("age", "int"),
    opt("email", "str"),
    opt("phone_number", "str"),
    opt("address", "str"),
    exc("internal_id", "str"),
)
