"""Enumeration of the required-field subset lattice.

Every subset of the required fields is one builder state, so a schema with
``N`` required fields yields ``2 ** N`` nodes. ``N`` is a per-record
constant capped by schema validation (``max_required_fields``).
"""

from __future__ import annotations

import logging

from fluentgen.synthesis.model import Lattice, LatticeNode

logger = logging.getLogger(__name__)


def _popcount(mask: int) -> int:
    return bin(mask).count("1")


def enumerate_lattice(width: int) -> Lattice:
    """Build the lattice over ``width`` required fields.

    Nodes are ordered by how many fields they provide, then by bitmask, so
    ``Initial`` comes first and ``Final`` last. Each node has one outgoing
    edge per missing field, leading to the node that also provides it.
    """
    if width < 0:
        raise ValueError("width must be non-negative")
    masks = sorted(range(1 << width), key=lambda mask: (_popcount(mask), mask))
    lattice = Lattice(
        width=width, nodes=tuple(LatticeNode(provided=mask, width=width) for mask in masks)
    )
    logger.debug(
        "lattice width=%d nodes=%d edges=%d", width, len(lattice.nodes), lattice.edge_count
    )
    return lattice
