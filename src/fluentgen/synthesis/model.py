from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Tuple


class Role(str, Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"
    EXCLUDED = "excluded"


@dataclass(frozen=True)
class FieldDecl:
    """One record field as declared, before classification."""

    name: str
    type_hint: str = "object"
    required: bool = False
    excluded: bool = False


@dataclass(frozen=True)
class RecordSchema:
    name: str
    fields: Tuple[FieldDecl, ...] = ()
    scope: str = ""
    kind: str = "record"
    imports: Tuple[str, ...] = ()


@dataclass(frozen=True)
class FieldSpec:
    name: str
    type_hint: str
    role: Role
    index: int


@dataclass(frozen=True)
class ClassifiedFields:
    required: Tuple[FieldSpec, ...] = ()
    optional: Tuple[FieldSpec, ...] = ()
    excluded: Tuple[FieldSpec, ...] = ()
    full_order: Tuple[FieldSpec, ...] = ()


@dataclass(frozen=True)
class LatticeNode:
    """A subset of the required fields, encoded as a bitmask over their positions.

    Bit ``i`` is set when the ``i``-th required field (in declaration order)
    has been provided. ``width`` is the number of required fields.
    """

    provided: int
    width: int

    @property
    def full_mask(self) -> int:
        return (1 << self.width) - 1

    @property
    def missing(self) -> int:
        return self.full_mask & ~self.provided

    @property
    def provided_positions(self) -> Tuple[int, ...]:
        return tuple(i for i in range(self.width) if self.provided >> i & 1)

    @property
    def missing_positions(self) -> Tuple[int, ...]:
        return tuple(i for i in range(self.width) if self.missing >> i & 1)

    @property
    def is_initial(self) -> bool:
        return self.provided == 0

    @property
    def is_final(self) -> bool:
        return self.missing == 0

    def with_position(self, position: int) -> LatticeNode:
        return LatticeNode(provided=self.provided | (1 << position), width=self.width)

    def without_position(self, position: int) -> LatticeNode:
        return LatticeNode(provided=self.provided & ~(1 << position), width=self.width)


@dataclass(frozen=True)
class LatticeEdge:
    source: LatticeNode
    target: LatticeNode
    position: int


@dataclass(frozen=True)
class Lattice:
    """Subset lattice over ``width`` required fields.

    Only the nodes are stored. Edges follow from each node's bitmask and are
    produced on demand, one per field the node is still missing.
    """

    width: int
    nodes: Tuple[LatticeNode, ...]

    @property
    def initial(self) -> LatticeNode:
        return LatticeNode(provided=0, width=self.width)

    @property
    def final(self) -> LatticeNode:
        return LatticeNode(provided=(1 << self.width) - 1, width=self.width)

    def outgoing(self, node: LatticeNode) -> Tuple[LatticeEdge, ...]:
        return tuple(
            LatticeEdge(source=node, target=node.with_position(position), position=position)
            for position in node.missing_positions
        )

    def incoming(self, node: LatticeNode) -> Tuple[LatticeEdge, ...]:
        return tuple(
            LatticeEdge(source=node.without_position(position), target=node, position=position)
            for position in node.provided_positions
        )

    def edges(self) -> Iterator[LatticeEdge]:
        for node in self.nodes:
            yield from self.outgoing(node)

    @property
    def edge_count(self) -> int:
        return self.width * (1 << self.width) // 2


@dataclass(frozen=True)
class OptionalSlot:
    field: FieldSpec
    default: str
    getter_hint: str


@dataclass(frozen=True)
class CarrierSpec:
    slots: Tuple[OptionalSlot, ...]
    protocol_name: str = "Carrier"
    base_name: str = "OptionalFields"
    parameter: str = "carrier"


@dataclass(frozen=True)
class ConstructionArgument:
    field: FieldSpec
    expression: str


@dataclass(frozen=True)
class ConstructionSpec:
    record_name: str
    arguments: Tuple[ConstructionArgument, ...]


@dataclass(frozen=True)
class TransitionSpec:
    field: FieldSpec
    target: str
    arguments: Tuple[FieldSpec, ...]


@dataclass(frozen=True)
class StateSpec:
    name: str
    node: LatticeNode
    stored: Tuple[FieldSpec, ...]
    transitions: Tuple[TransitionSpec, ...]
    finish: bool
    takes_carrier: bool


@dataclass(frozen=True)
class BuilderPlan:
    record: RecordSchema
    builder_name: str
    module_name: str
    fields: ClassifiedFields
    lattice: Lattice
    states: Tuple[StateSpec, ...]
    carrier: CarrierSpec | None
    construction: ConstructionSpec
    factory_name: str = "builder"
    finish_name: str = "build"

    def state(self, name: str) -> StateSpec:
        for state in self.states:
            if state.name == name:
                return state
        raise KeyError(name)


@dataclass(frozen=True)
class GeneratorConfig:
    builder_suffix: str = "Builder"
    factory_name: str = "builder"
    finish_name: str = "build"
    trigger_name: str = "@fluent_builder"
    conflicting_markers: str = "error"
    max_required_fields: int = 20


@dataclass(frozen=True)
class SourceUnit:
    record: str
    scope: str
    module_name: str
    builder_name: str
    code: str

    @property
    def qualified_name(self) -> str:
        if not self.scope:
            return self.module_name
        return f"{self.scope}.{self.module_name}"


@dataclass(frozen=True)
class Diagnostic:
    record: str
    kind: str
    message: str


@dataclass
class BatchReport:
    units: List[SourceUnit] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return bool(self.diagnostics)
