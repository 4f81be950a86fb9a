"""Tests for the chain model and its validation helpers."""

import pytest

from core.chain import (
    Anchor,
    ChainedEntity,
    ChainedSolution,
    assert_valid_chains,
    find_anchor,
    validate_chains,
    walk_chain,
)


def test_entities_compare_by_identity():
    first = ChainedEntity("e1", (1.0, 2.0))
    second = ChainedEntity("e1", (1.0, 2.0))

    assert first != second
    assert len({first, second}) == 2
    assert Anchor("A1") != Anchor("A1")


def test_duplicate_ids_are_rejected():
    with pytest.raises(ValueError):
        ChainedSolution(anchors=[Anchor("x")], entities=[ChainedEntity("x")])


def test_lookup_and_snapshot(chains):
    fx = chains({"A1": ["e1", "e2"], "A2": []}, unassigned=["u1"], nullable=True)

    assert fx.solution.get_entity("e2").previous is fx.e("e1")
    assert fx.solution.snapshot() == {"e1": "A1", "e2": "e1", "u1": None}
    with pytest.raises(ValueError):
        fx.solution.get_anchor("A9")
    with pytest.raises(ValueError):
        fx.solution.get_entity("e9")


def test_walk_chain_follows_trailing_entities(chains):
    fx = chains({"A1": ["e1", "e2", "e3"], "A2": []})

    assert [str(e) for e in walk_chain(fx.a("A1"), fx.inverse)] == ["e1", "e2", "e3"]
    assert walk_chain(fx.a("A2"), fx.inverse) == []
    with pytest.raises(ValueError):
        walk_chain(fx.a("A1"), fx.inverse, max_length=2)


def test_describe_chains_lists_unassigned_entities(chains):
    fx = chains({"A1": ["e1"], "A2": ["e2", "e3"]}, unassigned=["u1", "u2"], nullable=True)

    assert fx.chains() == ["A1 -> e1", "A2 -> e2 -> e3", "unassigned: u1, u2"]


def test_find_anchor(chains):
    fx = chains({"A1": ["e1", "e2"], "A2": ["e3"]}, unassigned=["u1"], nullable=True)

    assert find_anchor(fx.e("e2"), fx.descriptor) is fx.a("A1")
    assert find_anchor(fx.e("e3"), fx.descriptor) is fx.a("A2")
    assert find_anchor(fx.e("u1"), fx.descriptor) is None


def test_valid_chains_have_no_violations(chains):
    fx = chains({"A1": ["e1", "e2", "e3"], "A2": ["e4"]})

    assert validate_chains(fx.solution, fx.descriptor) == []
    assert_valid_chains(fx.solution, fx.descriptor)


def test_shared_predecessor_is_reported(chains):
    fx = chains({"A1": ["e1", "e2"], "A2": ["e3"]})
    fx.e("e3").previous = fx.e("e1")

    violations = validate_chains(fx.solution, fx.descriptor)

    assert any("both point at e1" in violation for violation in violations)
    with pytest.raises(ValueError):
        assert_valid_chains(fx.solution, fx.descriptor)


def test_cycle_is_reported(chains):
    fx = chains({"A1": ["e1", "e2"]})
    fx.e("e1").previous = fx.e("e2")

    violations = validate_chains(fx.solution, fx.descriptor)

    assert any("cycle" in violation for violation in violations)
    with pytest.raises(ValueError):
        find_anchor(fx.e("e1"), fx.descriptor, max_length=10)


def test_unassigned_entity_requires_nullable_variable(chains):
    fx = chains({"A1": ["e1"]}, unassigned=["u1"])

    violations = validate_chains(fx.solution, fx.descriptor)

    assert violations == ["u1 is unassigned but the variable is not nullable"]


def test_entity_behind_unassigned_entity_is_reported(chains):
    fx = chains({"A1": ["e1"]}, unassigned=["u1"], nullable=True)
    fx.e("e1").previous = fx.e("u1")

    violations = validate_chains(fx.solution, fx.descriptor)

    assert violations == ["e1 is behind an unassigned entity"]


def test_foreign_value_is_reported(chains):
    fx = chains({"A1": ["e1"]})
    fx.e("e1").previous = Anchor("foreign")

    violations = validate_chains(fx.solution, fx.descriptor)

    assert violations == ["e1 points at foreign which is not part of the solution"]
