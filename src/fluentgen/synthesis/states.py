from __future__ import annotations

import logging
from typing import List, Tuple

import libcst as cst

from fluentgen.synthesis.construction import construction_call, stored_attribute
from fluentgen.synthesis.model import (
    BuilderPlan,
    CarrierSpec,
    ClassifiedFields,
    Lattice,
    StateSpec,
    TransitionSpec,
)
from fluentgen.synthesis.naming import state_name
from fluentgen.synthesis.nodes import class_def, docstring, method, param, statement

logger = logging.getLogger(__name__)


def plan_states(
    fields: ClassifiedFields,
    lattice: Lattice,
    carrier: CarrierSpec | None,
) -> Tuple[StateSpec, ...]:
    """Describe one builder state per lattice node.

    Stored required fields and transition arguments are listed in
    declaration order, never acquisition order, so every path into a node
    meets the same constructor.
    """
    states: List[StateSpec] = []
    for node in lattice.nodes:
        transitions = []
        for edge in lattice.outgoing(node):
            transitions.append(
                TransitionSpec(
                    field=fields.required[edge.position],
                    target=state_name(edge.target),
                    arguments=tuple(
                        fields.required[pos] for pos in edge.target.provided_positions
                    ),
                )
            )
        states.append(
            StateSpec(
                name=state_name(node),
                node=node,
                stored=tuple(fields.required[pos] for pos in node.provided_positions),
                transitions=tuple(transitions),
                finish=node.is_final,
                takes_carrier=carrier is not None and not node.is_initial,
            )
        )
    logger.debug("planned %d builder states", len(states))
    return tuple(states)


def _describe(state: StateSpec, fields: ClassifiedFields) -> str:
    if not fields.required:
        return "Builder state; no required fields, ready to build."
    if state.node.is_initial:
        return "Builder state with no required fields provided yet."
    if state.finish:
        return "Builder state with every required field provided."
    missing = ", ".join(fields.required[pos].name for pos in state.node.missing_positions)
    return f"Builder state still missing: {missing}."


def _render_init(state: StateSpec, plan: BuilderPlan) -> cst.FunctionDef | None:
    if not state.stored and not state.takes_carrier:
        return None
    params = [param(field.name, field.type_hint) for field in state.stored]
    body: List[cst.BaseStatement] = []
    if state.takes_carrier and plan.carrier is not None:
        carrier = plan.carrier
        params.append(
            param(carrier.parameter, f"{plan.builder_name}.{carrier.protocol_name}")
        )
        body.append(statement(f"super().__init__({carrier.parameter})"))
    for field in state.stored:
        body.append(statement(f"self.{stored_attribute(field)} = {field.name}"))
    return method("__init__", params, "None", body)


def _render_transition(transition: TransitionSpec, plan: BuilderPlan) -> cst.FunctionDef:
    field = transition.field
    args = [
        field.name if argument == field else f"self.{stored_attribute(argument)}"
        for argument in transition.arguments
    ]
    if plan.carrier is not None:
        args.append("self")
    target = f"{plan.builder_name}.{transition.target}"
    return method(
        field.name,
        [param(field.name, field.type_hint)],
        target,
        [statement(f"return {target}({', '.join(args)})")],
    )


def _render_finish(plan: BuilderPlan) -> cst.FunctionDef:
    call = construction_call(plan.construction)
    return method(
        plan.finish_name,
        [],
        plan.construction.record_name,
        [cst.SimpleStatementLine([cst.Return(value=call)])],
    )


def render_state(state: StateSpec, plan: BuilderPlan) -> cst.ClassDef:
    bases = [plan.carrier.base_name] if plan.carrier is not None else []
    body: List[cst.BaseStatement] = [docstring(_describe(state, plan.fields))]
    init = _render_init(state, plan)
    if init is not None:
        body.append(init)
    for transition in state.transitions:
        body.append(_render_transition(transition, plan))
    if state.finish:
        body.append(_render_finish(plan))
    return class_def(state.name, bases, body)
