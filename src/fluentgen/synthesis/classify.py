from __future__ import annotations

import keyword
from typing import List

import libcst as cst

from fluentgen.exceptions import (
    AmbiguityError,
    LatticeTooLargeError,
    SchemaError,
    UsageError,
)
from fluentgen.synthesis.model import (
    CarrierSpec,
    ClassifiedFields,
    FieldSpec,
    GeneratorConfig,
    RecordSchema,
    Role,
)
from fluentgen.synthesis.naming import builder_name, is_state_name

_DEFAULT_CONFIG = GeneratorConfig()
_CARRIER = CarrierSpec(slots=())
_CARRIER_PARAMETER = _CARRIER.parameter


def _is_identifier(value: str) -> bool:
    return value.isidentifier() and not keyword.iskeyword(value)


def _is_dunder(value: str) -> bool:
    return len(value) > 4 and value.startswith("__") and value.endswith("__")


def _is_mangled(value: str) -> bool:
    return value.startswith("__") and not _is_dunder(value)


def _reserved_names(config: GeneratorConfig) -> set[str]:
    return {"self", "super", "typing", _CARRIER_PARAMETER, config.finish_name}


def _check_type_hint(schema: RecordSchema, name: str, hint: str) -> None:
    try:
        cst.parse_expression(hint)
    except cst.ParserSyntaxError as exc:
        raise SchemaError(
            f"Field '{name}' has an unparseable type hint '{hint}': {exc.message}",
            record=schema.name,
        ) from exc


def _check_import(schema: RecordSchema, line: str) -> None:
    try:
        statement = cst.parse_statement(line)
    except cst.ParserSyntaxError as exc:
        raise SchemaError(
            f"Import line '{line}' does not parse: {exc.message}", record=schema.name
        ) from exc
    body = getattr(statement, "body", ())
    if not (
        isinstance(statement, cst.SimpleStatementLine)
        and len(body) == 1
        and isinstance(body[0], (cst.Import, cst.ImportFrom))
    ):
        raise SchemaError(
            f"Import line '{line}' is not a single import statement", record=schema.name
        )


def _check_generated_names(schema: RecordSchema, config: GeneratorConfig) -> None:
    # The factory sits beside the nested classes of the outer builder; the
    # finish method sits on Final next to the carrier's members.
    factory = config.factory_name
    if (
        factory.startswith("__")
        or is_state_name(factory)
        or factory in {_CARRIER.protocol_name, _CARRIER.base_name, "typing"}
    ):
        raise SchemaError(
            f"Factory name '{factory}' clashes with a generated name", record=schema.name
        )
    finish = config.finish_name
    members: set[str] = set()
    for decl in schema.fields:
        if decl.excluded:
            continue
        members.add(f"_{decl.name}")
        if not decl.required:
            members.add(f"get_{decl.name}")
    if finish.startswith("__") or finish in members:
        raise SchemaError(
            f"Finish name '{finish}' clashes with a generated name", record=schema.name
        )


def validate_schema(
    schema: RecordSchema, config: GeneratorConfig = _DEFAULT_CONFIG
) -> None:
    """Reject schemas the lattice cannot represent faithfully.

    Raises ``UsageError`` for non-record targets, ``AmbiguityError`` for
    duplicate names or (unless the ``exclude`` policy is configured) fields
    carrying both markers, ``LatticeTooLargeError`` past the configured
    required-field limit and ``SchemaError`` for everything else.
    """
    if schema.kind != "record":
        raise UsageError(
            f"{config.trigger_name} can only be applied to records",
            record=schema.name,
        )
    if not _is_identifier(schema.name):
        raise SchemaError(
            f"Record name '{schema.name}' is not a valid identifier", record=schema.name
        )
    if schema.scope and not all(_is_identifier(part) for part in schema.scope.split(".")):
        raise SchemaError(
            f"Scope '{schema.scope}' is not a dotted package path", record=schema.name
        )
    for generated in (config.factory_name, config.finish_name):
        if not _is_identifier(generated):
            raise SchemaError(
                f"Generated name '{generated}' is not a valid identifier",
                record=schema.name,
            )
    _check_generated_names(schema, config)

    seen: set[str] = set()
    for decl in schema.fields:
        if decl.name in seen:
            raise AmbiguityError(
                f"Field '{decl.name}' is declared more than once", record=schema.name
            )
        seen.add(decl.name)

    reserved = _reserved_names(config) | {builder_name(schema.name, config.builder_suffix)}
    getters = {
        f"get_{decl.name}"
        for decl in schema.fields
        if not decl.excluded and not decl.required
    }
    for decl in schema.fields:
        if not _is_identifier(decl.name) or _is_dunder(decl.name):
            raise SchemaError(
                f"Field name '{decl.name}' is not a usable identifier", record=schema.name
            )
        if _is_mangled(decl.name) and not decl.excluded:
            raise SchemaError(
                f"Field name '{decl.name}' would be name-mangled inside the builder",
                record=schema.name,
            )
        if decl.name in reserved and not decl.excluded:
            raise SchemaError(
                f"Field name '{decl.name}' clashes with a generated name",
                record=schema.name,
            )
        if decl.name in getters and not decl.excluded:
            raise SchemaError(
                f"Field name '{decl.name}' clashes with a generated getter",
                record=schema.name,
            )
        if decl.required and decl.excluded and config.conflicting_markers == "error":
            raise AmbiguityError(
                f"Field '{decl.name}' is marked both required and excluded",
                record=schema.name,
            )
        _check_type_hint(schema, decl.name, decl.type_hint)

    for line in schema.imports:
        _check_import(schema, line)

    required_count = sum(1 for decl in schema.fields if decl.required and not decl.excluded)
    if required_count > config.max_required_fields:
        raise LatticeTooLargeError(
            f"{required_count} required fields exceed the limit of "
            f"{config.max_required_fields} ({2 ** required_count} builder states)",
            record=schema.name,
        )


def classify_fields(schema: RecordSchema) -> ClassifiedFields:
    """Partition fields by role, keeping declaration order within each role.

    A field carrying both markers is excluded.
    """
    required: List[FieldSpec] = []
    optional: List[FieldSpec] = []
    excluded: List[FieldSpec] = []
    full_order: List[FieldSpec] = []
    for index, decl in enumerate(schema.fields):
        if decl.excluded:
            spec = FieldSpec(decl.name, decl.type_hint, Role.EXCLUDED, index)
            excluded.append(spec)
        elif decl.required:
            spec = FieldSpec(decl.name, decl.type_hint, Role.REQUIRED, index)
            required.append(spec)
        else:
            spec = FieldSpec(decl.name, decl.type_hint, Role.OPTIONAL, index)
            optional.append(spec)
        full_order.append(spec)
    return ClassifiedFields(
        required=tuple(required),
        optional=tuple(optional),
        excluded=tuple(excluded),
        full_order=tuple(full_order),
    )
