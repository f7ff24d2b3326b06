"""Optional-field carrier shared by every builder state.

Optional values live on one base class that all states inherit from. Its
setters return ``Self`` so chaining stays on the concrete state, and its
constructor copies the current values from whichever state it is handed.
This keeps the number of optional fields independent of the shape of the
required-field lattice.
"""

from __future__ import annotations

from typing import List

import libcst as cst

from fluentgen.synthesis.construction import (
    admits_none,
    default_value,
    getter_name,
    stored_attribute,
)
from fluentgen.synthesis.model import CarrierSpec, ClassifiedFields, OptionalSlot
from fluentgen.synthesis.nodes import class_def, docstring, method, param, statement


def build_carrier(fields: ClassifiedFields) -> CarrierSpec | None:
    if not fields.optional:
        return None
    slots = []
    for field in fields.optional:
        default = default_value(field.type_hint)
        getter_hint = field.type_hint
        if default == "None" and not admits_none(field.type_hint):
            getter_hint = f"{field.type_hint} | None"
        slots.append(OptionalSlot(field=field, default=default, getter_hint=getter_hint))
    return CarrierSpec(slots=tuple(slots))


def render_protocol(carrier: CarrierSpec) -> cst.ClassDef:
    body: List[cst.BaseStatement] = [
        docstring("Read access to the optional values held by a builder state.")
    ]
    for slot in carrier.slots:
        body.append(
            method(
                getter_name(slot.field),
                [],
                slot.getter_hint,
                [statement("...")],
            )
        )
    return class_def(carrier.protocol_name, ["typing.Protocol"], body)


def render_base(carrier: CarrierSpec, builder_name: str) -> cst.ClassDef:
    parameter = carrier.parameter
    copy_defaults = [
        statement(f"self.{stored_attribute(slot.field)} = {slot.default}")
        for slot in carrier.slots
    ]
    copy_forward = [
        statement(
            f"self.{stored_attribute(slot.field)} = "
            f"{parameter}.{getter_name(slot.field)}()"
        )
        for slot in carrier.slots
    ]
    init_body = cst.If(
        test=cst.parse_expression(f"{parameter} is None"),
        body=cst.IndentedBlock(body=copy_defaults),
        orelse=cst.Else(body=cst.IndentedBlock(body=copy_forward)),
    )
    body: List[cst.BaseStatement] = [
        docstring("Optional values shared by every builder state."),
        method(
            "__init__",
            [param(parameter, f"{builder_name}.{carrier.protocol_name} | None", "None")],
            "None",
            [init_body],
        ),
    ]
    for slot in carrier.slots:
        name = slot.field.name
        body.append(
            method(
                name,
                [param(name, slot.field.type_hint)],
                "typing.Self",
                [
                    statement(f"self.{stored_attribute(slot.field)} = {name}"),
                    statement("return self"),
                ],
            )
        )
    for slot in carrier.slots:
        body.append(
            method(
                getter_name(slot.field),
                [],
                slot.getter_hint,
                [statement(f"return self.{stored_attribute(slot.field)}")],
            )
        )
    return class_def(carrier.base_name, [], body)
