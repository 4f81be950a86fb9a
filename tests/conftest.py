"""Shared builders for chain tests.

``build_chains`` turns a compact layout such as
``{"A1": ["e1", "e2", "e3"], "A2": ["e4"]}`` into a working solution wired to
a score director and its inverse supply, so individual tests can focus on
assertions instead of boilerplate setup.
"""
from __future__ import annotations

from dataclasses import dataclass
import random
from typing import Dict, List, Optional, Sequence

import pytest

from config import DEBUG_SOLVER_PARAMETERS, SolverParameters
from core.chain import Anchor, ChainedEntity, ChainedSolution
from core.inverse import SingletonInverseVariableSupply
from core.variable import ChainedVariableDescriptor
from planner.score_director import ScoreDirector


@dataclass
class ChainFixture:
    """Everything a move needs, plus lookups by id."""

    solution: ChainedSolution
    descriptor: ChainedVariableDescriptor
    score_director: ScoreDirector
    inverse: SingletonInverseVariableSupply

    def e(self, entity_id: str) -> ChainedEntity:
        return self.solution.get_entity(entity_id)

    def a(self, anchor_id: str) -> Anchor:
        return self.solution.get_anchor(anchor_id)

    def chains(self) -> List[str]:
        return self.solution.describe_chains(self.inverse)


def build_chains(
    layout: Dict[str, Sequence[str]],
    unassigned: Sequence[str] = (),
    *,
    nullable: bool = False,
    params: SolverParameters = DEBUG_SOLVER_PARAMETERS,
    rng: Optional[random.Random] = None,
) -> ChainFixture:
    anchors: List[Anchor] = []
    entities: List[ChainedEntity] = []
    for row, (anchor_id, chain) in enumerate(layout.items()):
        anchor = Anchor(anchor_id, (0.0, 10.0 * row))
        anchors.append(anchor)
        previous = anchor
        for position, entity_id in enumerate(chain, start=1):
            if rng is not None:
                coordinates = (rng.uniform(0, 100), rng.uniform(0, 100))
            else:
                coordinates = (float(position), 10.0 * row)
            entity = ChainedEntity(entity_id, coordinates, previous=previous)
            entities.append(entity)
            previous = entity
    for index, entity_id in enumerate(unassigned):
        entities.append(ChainedEntity(entity_id, (50.0 + index, 50.0)))

    solution = ChainedSolution(anchors=anchors, entities=entities)
    descriptor = ChainedVariableDescriptor("previous", nullable=nullable)
    score_director = ScoreDirector(solution, descriptor, params=params)
    return ChainFixture(solution, descriptor, score_director, score_director.supply_inverse())


def random_layout(rng: random.Random, num_anchors: int, num_entities: int,
                  num_unassigned: int = 0):
    """Spread ``num_entities`` entities randomly over ``num_anchors`` chains."""
    layout: Dict[str, List[str]] = {f"A{i + 1}": [] for i in range(num_anchors)}
    anchor_ids = list(layout)
    for index in range(num_entities):
        layout[rng.choice(anchor_ids)].append(f"e{index + 1}")
    unassigned = [f"u{index + 1}" for index in range(num_unassigned)]
    return layout, unassigned


@pytest.fixture
def chains():
    """Factory fixture around :func:`build_chains`."""
    return build_chains


@pytest.fixture
def random_chains():
    """Factory fixture building a seeded random configuration."""

    def _build(seed: int, num_anchors: int = 3, num_entities: int = 8, num_unassigned: int = 2):
        rng = random.Random(seed)
        layout, unassigned = random_layout(rng, num_anchors, num_entities, num_unassigned)
        return build_chains(layout, unassigned, nullable=True, rng=rng), rng

    return _build
