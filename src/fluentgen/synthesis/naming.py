from __future__ import annotations

import re

from fluentgen.synthesis.model import LatticeNode

INITIAL_STATE = "Initial"
FINAL_STATE = "Final"
_MISSING_PREFIX = "Missing"
_STATE_TOKEN = re.compile(rf"{_MISSING_PREFIX}(?:_\d+)+")

_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def _snake(value: str) -> str:
    parts = [p for p in re.split(r"[^a-zA-Z0-9]+", _WORD_BOUNDARY.sub("_", value)) if p]
    return "_".join(p.lower() for p in parts)


def _normalize_identifier(value: str, fallback: str) -> str:
    cleaned = re.sub(r"[^a-zA-Z0-9_]", "", value)
    if not cleaned:
        return fallback
    if cleaned[0].isdigit():
        return f"{fallback}{cleaned}"
    return cleaned


def state_name(node: LatticeNode) -> str:
    """Name the builder state for ``node`` by what is still missing.

    The token lists the declaration positions of the missing required
    fields, so two acquisition orders that reach the same subset always get
    the same name, and distinct subsets never share one. With no required
    fields the single state is ``Initial``.
    """
    if node.is_initial:
        return INITIAL_STATE
    if node.is_final:
        return FINAL_STATE
    token = "_".join(str(position) for position in node.missing_positions)
    return f"{_MISSING_PREFIX}_{token}"


def builder_name(record_name: str, suffix: str = "Builder") -> str:
    return _normalize_identifier(f"{record_name}{suffix}", "Builder")


def module_name(record_name: str, suffix: str = "Builder") -> str:
    return _normalize_identifier(_snake(f"{record_name}{suffix}"), "builder")


def is_state_name(value: str) -> bool:
    """Whether ``value`` is a name the lattice can give a builder state."""
    if value in (INITIAL_STATE, FINAL_STATE):
        return True
    return _STATE_TOKEN.fullmatch(value) is not None
