"""Score director: the single mutation sink of the working solution.

Moves never assign the chained variable themselves.  They call
:meth:`ScoreDirector.change_variable_facade`, which

* notifies the score calculator before and after the write so the score stays
  incremental,
* notifies variable listeners (the inverse supply) so the successor index
  follows the graph,
* journals the change and counts it.

Variable listener notifications are batched per move.  The *before* event of
an entity is delivered on its first change, the *after* event is delivered
once, with the final value, by :meth:`ScoreDirector.trigger_variable_listeners`.
A chained move temporarily lets two entities point at the same value (the
old chain is closed before the moved entity leaves), so listeners must not
observe the intermediate states.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Dict, List, Optional

from config import DEFAULT_SOLVER_PARAMETERS, SolverParameters
from core.chain import ChainedSolution
from core.inverse import SingletonInverseVariableSupply
from core.variable import ChainedVariableDescriptor
from planner.score import ChainDistanceScoreCalculator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VariableChange:
    """One primitive mutation ``entity.var := new_value``."""

    entity: object
    old_value: Optional[object]
    new_value: Optional[object]

    def __str__(self) -> str:
        return f"{self.entity}.var := {self.new_value} (was {self.old_value})"


class ScoreDirector:
    """Applies primitive variable changes and maintains the incremental score."""

    def __init__(
        self,
        working_solution: ChainedSolution,
        descriptor: ChainedVariableDescriptor,
        *,
        score_calculator: Optional[ChainDistanceScoreCalculator] = None,
        params: SolverParameters = DEFAULT_SOLVER_PARAMETERS,
    ) -> None:
        self.params = params
        self.descriptor = descriptor
        self.score_calculator = score_calculator or ChainDistanceScoreCalculator(params.score)
        self.journal: List[VariableChange] = []
        self.mutation_count = 0
        self._inverse_supply: Optional[SingletonInverseVariableSupply] = None
        self._variable_listeners: List[SingletonInverseVariableSupply] = []
        # id(entity) -> entity, in first-change order
        self._pending_notifications: Dict[int, object] = {}
        # Without an explicit range, the range follows the working solution.
        self._derives_value_range = not descriptor.has_value_range
        self.set_working_solution(working_solution)

    @property
    def move_params(self):
        return self.params.moves

    # ========== Working solution ==========

    def set_working_solution(self, working_solution: ChainedSolution) -> None:
        """Install a solution and rebuild every supply and the score from scratch."""
        self.working_solution = working_solution
        if self._derives_value_range:
            self.descriptor.set_value_range(working_solution.get_value_range())
        self._pending_notifications.clear()
        for listener in self._variable_listeners:
            listener.reset_working_solution(working_solution.entities)
        self.score_calculator.reset_working_solution(working_solution, self.descriptor)
        logger.debug(f"[SCORE DIRECTOR] Working solution set: {len(working_solution.anchors)} anchors, "
                     f"{len(working_solution.entities)} entities")

    def supply_inverse(self) -> SingletonInverseVariableSupply:
        """Return the inverse supply of the chained variable, creating it on first use."""
        if self._inverse_supply is None:
            supply = SingletonInverseVariableSupply(self.descriptor)
            supply.reset_working_solution(self.working_solution.entities)
            self._variable_listeners.append(supply)
            self._inverse_supply = supply
        return self._inverse_supply

    # ========== Mutations ==========

    def before_variable_changed(self, descriptor: ChainedVariableDescriptor, entity: object) -> None:
        self.score_calculator.before_variable_changed(descriptor, entity)
        if id(entity) not in self._pending_notifications:
            self._pending_notifications[id(entity)] = entity
            for listener in self._variable_listeners:
                listener.before_variable_changed(descriptor, entity)

    def after_variable_changed(self, descriptor: ChainedVariableDescriptor, entity: object) -> None:
        self.score_calculator.after_variable_changed(descriptor, entity)

    def validate_change(self, descriptor: ChainedVariableDescriptor,
                        entity: object, value: Optional[object]) -> None:
        """Raise ValueError when ``entity.var := value`` would be rejected."""
        if value is None and not descriptor.nullable:
            raise ValueError(f"{descriptor} is not nullable: cannot unassign {entity}")

    def change_variable_facade(self, descriptor: ChainedVariableDescriptor,
                               entity: object, value: Optional[object]) -> None:
        """Set ``entity.var := value`` and keep score, listeners and journal informed."""
        self.validate_change(descriptor, entity, value)
        old_value = descriptor.get_value(entity)
        self.before_variable_changed(descriptor, entity)
        descriptor.set_value(entity, value)
        self.after_variable_changed(descriptor, entity)
        self.mutation_count += 1
        if self.params.score_director.track_journal:
            self.journal.append(VariableChange(entity, old_value, value))
        logger.debug(f"[SCORE DIRECTOR] {entity}.{descriptor.variable_name}: {old_value} -> {value}")

    def trigger_variable_listeners(self) -> None:
        """Deliver the pending after-events; called once a move is fully applied."""
        pending = list(self._pending_notifications.values())
        self._pending_notifications.clear()
        for entity in pending:
            for listener in self._variable_listeners:
                listener.after_variable_changed(self.descriptor, entity)
        if self.params.score_director.assert_inverse_consistency:
            self.assert_inverse_consistency()

    def clear_journal(self) -> None:
        self.journal.clear()

    # ========== Score ==========

    def calculate_score(self) -> float:
        return self.score_calculator.calculate_score()

    def calculate_score_from_scratch(self) -> float:
        return self.score_calculator.calculate_score_from_scratch(self.working_solution)

    # ========== Assertions ==========

    def assert_inverse_consistency(self) -> None:
        """Raise RuntimeError when the live inverse supply differs from a fresh rebuild."""
        if self._inverse_supply is None:
            return
        if self._pending_notifications:
            raise RuntimeError("Variable listeners have pending notifications; "
                               "call trigger_variable_listeners() first.")
        fresh = SingletonInverseVariableSupply(self.descriptor)
        fresh.reset_working_solution(self.working_solution.entities)
        if fresh.snapshot() != self._inverse_supply.snapshot():
            logger.error("[SCORE DIRECTOR] Inverse supply drifted from the working solution")
            raise RuntimeError(
                f"The inverse supply is corrupted: it holds {len(self._inverse_supply)} entries "
                f"but the working solution yields {len(fresh)}."
            )

    def assert_score_consistency(self, tolerance: float = 1e-6) -> None:
        """Raise RuntimeError when the incremental score drifted from a full recalculation."""
        incremental = self.calculate_score()
        scratch = self.calculate_score_from_scratch()
        if abs(incremental - scratch) > tolerance:
            raise RuntimeError(f"Score corruption: incremental {incremental} != from scratch {scratch}")
