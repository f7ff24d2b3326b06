from __future__ import annotations

from typing import List

import libcst as cst

from fluentgen.synthesis.carrier import render_base, render_protocol
from fluentgen.synthesis.model import BuilderPlan
from fluentgen.synthesis.naming import INITIAL_STATE
from fluentgen.synthesis.nodes import blank_lines, class_def, docstring, method, statement
from fluentgen.synthesis.states import render_state

HEADER_COMMENT = "# Auto-generated by fluentgen. Do not edit."


def _imports(plan: BuilderPlan) -> List[cst.BaseStatement]:
    lines: List[cst.BaseStatement] = [statement("from __future__ import annotations")]
    if plan.carrier is not None:
        lines.append(statement("import typing").with_changes(leading_lines=blank_lines(1)))
    record = plan.record
    extra = []
    if record.scope:
        extra.append(statement(f"from {record.scope} import {record.name}"))
    extra.extend(statement(line) for line in record.imports)
    if extra:
        extra[0] = extra[0].with_changes(leading_lines=blank_lines(1))
    lines.extend(extra)
    return lines


def _builder_doc(plan: BuilderPlan) -> str:
    fields = plan.fields
    lines = [f"Fluent builder for {plan.record.name}.", ""]
    if fields.required:
        names = ", ".join(field.name for field in fields.required)
        lines.append(f"Required (any order): {names}")
    if fields.optional:
        names = ", ".join(field.name for field in fields.optional)
        lines.append(f"Optional (any point): {names}")
    if fields.excluded:
        names = ", ".join(field.name for field in fields.excluded)
        lines.append(f"Always defaulted: {names}")
    lines.append(f"{plan.finish_name}() is only offered once every required field is set.")
    indented = "\n".join(f"    {line}" if line else "" for line in lines[1:])
    return f"{lines[0]}\n{indented}\n    "


def render_builder_module(plan: BuilderPlan) -> str:
    """Render the complete builder module for ``plan`` as Python source."""
    body: List[cst.BaseStatement] = [docstring(_builder_doc(plan))]
    if plan.carrier is not None:
        body.append(render_protocol(plan.carrier))
        body.append(render_base(plan.carrier, plan.builder_name))
    for state in plan.states:
        body.append(render_state(state, plan))
    initial = f"{plan.builder_name}.{INITIAL_STATE}"
    body.append(
        method(
            plan.factory_name,
            [],
            initial,
            [statement(f"return {initial}()")],
            bound=False,
            decorators=["staticmethod"],
        )
    )
    module = cst.Module(
        header=[cst.EmptyLine(indent=False, comment=cst.Comment(HEADER_COMMENT))],
        body=[*_imports(plan), class_def(plan.builder_name, [], body, leading=2)],
    )
    return module.code
