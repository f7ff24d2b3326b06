from __future__ import annotations

from typing import List

import libcst as cst

from fluentgen.synthesis.model import (
    ClassifiedFields,
    ConstructionArgument,
    ConstructionSpec,
    FieldSpec,
    Role,
)

_ZERO_VALUES = {
    "bool": "False",
    "int": "0",
    "float": "0.0",
    "complex": "0j",
}
_NONE_ADMITTING_NAMES = frozenset({"None", "Any", "object"})


def _base_name(node: cst.BaseExpression) -> str:
    if isinstance(node, cst.Name):
        return node.value
    if isinstance(node, cst.Attribute):
        return node.attr.value
    return ""


def default_value(type_hint: str) -> str:
    """Return the source text of the canonical default for ``type_hint``.

    Numeric builtins default to zero and ``bool`` to ``False``; every other
    annotation defaults to ``None``.
    """
    try:
        node = cst.parse_expression(type_hint)
    except cst.ParserSyntaxError:
        return "None"
    if isinstance(node, cst.Name):
        return _ZERO_VALUES.get(node.value, "None")
    return "None"


def _admits_none(node: cst.BaseExpression) -> bool:
    if isinstance(node, cst.BinaryOperation) and isinstance(node.operator, cst.BitOr):
        return _admits_none(node.left) or _admits_none(node.right)
    if isinstance(node, cst.Subscript):
        base = _base_name(node.value)
        if base == "Optional":
            return True
        if base == "Union":
            return any(
                isinstance(element.slice, cst.Index) and _admits_none(element.slice.value)
                for element in node.slice
            )
        return False
    if isinstance(node, (cst.Name, cst.Attribute)):
        return _base_name(node) in _NONE_ADMITTING_NAMES
    if isinstance(node, cst.SimpleString):
        try:
            return _admits_none(cst.parse_expression(node.evaluated_value))
        except cst.ParserSyntaxError:
            return False
    return False


def admits_none(type_hint: str) -> bool:
    try:
        return _admits_none(cst.parse_expression(type_hint))
    except cst.ParserSyntaxError:
        return False


def stored_attribute(field: FieldSpec) -> str:
    return f"_{field.name}"


def getter_name(field: FieldSpec) -> str:
    return f"get_{field.name}"


def _argument_expression(field: FieldSpec) -> str:
    if field.role is Role.EXCLUDED:
        return default_value(field.type_hint)
    if field.role is Role.OPTIONAL:
        return f"self.{getter_name(field)}()"
    return f"self.{stored_attribute(field)}"


def build_construction(record_name: str, fields: ClassifiedFields) -> ConstructionSpec:
    """Arguments for the record constructor, in declaration order.

    Required values come from the Final state's own attributes, optional
    values through the carrier getters, and excluded fields always get
    their type's default.
    """
    arguments = tuple(
        ConstructionArgument(field=field, expression=_argument_expression(field))
        for field in sorted(fields.full_order, key=lambda spec: spec.index)
    )
    return ConstructionSpec(record_name=record_name, arguments=arguments)


def construction_call(spec: ConstructionSpec) -> cst.Call:
    args: List[cst.Arg] = [
        cst.Arg(value=cst.parse_expression(argument.expression))
        for argument in spec.arguments
    ]
    return cst.Call(func=cst.Name(spec.record_name), args=args)
