"""Incremental chain distance score.

The score of a working solution is the negated length of all chains plus a
penalty per unassigned entity::

    score = -Σ d(previous(e), e) - unassigned_penalty * |{e : previous(e) is None}|

Every entity owns exactly one edge (to its predecessor), so a change of one
chained variable only touches that entity's contribution.  The calculator
retracts the contribution in ``before_variable_changed`` and adds the new one
in ``after_variable_changed``.
"""

from __future__ import annotations

from typing import Dict, Optional

from config import ChainScoreParams, DEFAULT_CHAIN_SCORE_PARAMS
from core.chain import ChainedSolution
from core.variable import ChainedVariableDescriptor
from physics.distance import coordinate_distance, get_distance_function


class ChainDistanceScoreCalculator:
    """Keeps the chain distance score current while variables change."""

    def __init__(self, params: ChainScoreParams = DEFAULT_CHAIN_SCORE_PARAMS) -> None:
        self.params = params
        self.distance_func = get_distance_function(params.distance_metric)
        self.descriptor: Optional[ChainedVariableDescriptor] = None
        self._contributions: Dict[int, float] = {}
        self._score = 0.0

    def reset_working_solution(self, solution: ChainedSolution,
                               descriptor: ChainedVariableDescriptor) -> None:
        self.descriptor = descriptor
        self._contributions.clear()
        self._score = 0.0
        for entity in solution.entities:
            self._insert(entity)

    def before_variable_changed(self, descriptor: ChainedVariableDescriptor, entity: object) -> None:
        self._retract(entity)

    def after_variable_changed(self, descriptor: ChainedVariableDescriptor, entity: object) -> None:
        self._insert(entity)

    def calculate_score(self) -> float:
        return self._score

    def calculate_score_from_scratch(self, solution: ChainedSolution) -> float:
        """Recompute without touching the incremental state."""
        return sum(self.entity_contribution(entity) for entity in solution.entities)

    def entity_contribution(self, entity: object) -> float:
        value = self.descriptor.get_value(entity)
        if value is None:
            return -self.params.unassigned_penalty
        return -coordinate_distance(value.coordinates, entity.coordinates, self.distance_func)

    def _insert(self, entity: object) -> None:
        contribution = self.entity_contribution(entity)
        self._contributions[id(entity)] = contribution
        self._score += contribution

    def _retract(self, entity: object) -> None:
        self._score -= self._contributions.pop(id(entity))
