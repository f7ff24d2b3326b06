from __future__ import annotations

import pytest

from fluentgen.synthesis.lattice import enumerate_lattice


@pytest.mark.parametrize("width", [0, 1, 2, 3, 5])
def test_lattice_has_one_node_per_subset(width: int) -> None:
    lattice = enumerate_lattice(width)
    assert len(lattice.nodes) == 2 ** width
    assert len({node.provided for node in lattice.nodes}) == 2 ** width
    assert lattice.nodes[0] == lattice.initial
    assert lattice.nodes[-1] == lattice.final


def test_lattice_degrees_match_subset_sizes() -> None:
    lattice = enumerate_lattice(4)
    for node in lattice.nodes:
        outgoing = lattice.outgoing(node)
        incoming = lattice.incoming(node)
        assert len(outgoing) == len(node.missing_positions)
        assert len(incoming) == len(node.provided_positions)
        for edge in outgoing:
            assert edge.target.provided == node.provided | (1 << edge.position)
    assert lattice.outgoing(lattice.final) == ()
    assert lattice.incoming(lattice.initial) == ()


def test_lattice_edge_count() -> None:
    # each of the N fields is added along 2 ** (N - 1) edges
    lattice = enumerate_lattice(5)
    assert lattice.edge_count == 5 * 2 ** 4
    edges = list(lattice.edges())
    assert len(edges) == lattice.edge_count
    assert len({(edge.source.provided, edge.position) for edge in edges}) == len(edges)


def test_empty_lattice_is_a_single_initial_final_node() -> None:
    lattice = enumerate_lattice(0)
    assert lattice.nodes == (lattice.initial,)
    assert lattice.initial.is_initial and lattice.initial.is_final
    assert list(lattice.edges()) == []
    assert lattice.edge_count == 0


def test_lattice_rejects_negative_width() -> None:
    with pytest.raises(ValueError):
        enumerate_lattice(-1)


def test_incoming_edges_mirror_outgoing_edges() -> None:
    lattice = enumerate_lattice(3)
    for node in lattice.nodes:
        for edge in lattice.incoming(node):
            assert edge in lattice.outgoing(edge.source)


def test_wide_lattice_stores_only_nodes() -> None:
    lattice = enumerate_lattice(16)
    assert len(lattice.nodes) == 2 ** 16
    assert lattice.edge_count == 16 * 2 ** 15
    assert [edge.position for edge in lattice.outgoing(lattice.initial)] == list(range(16))
