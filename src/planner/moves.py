"""Change moves over the chained planning variable.

A move is a reversible edit of the working solution.  The outer search asks
whether it is doable, lets :meth:`AbstractMove.do_move` capture the undo move
and apply it, and later replays the undo if the step is not accepted::

    if move.is_move_doable(score_director):
        undo_move = move.do_move(score_director)
        ...
        undo_move.do_move(score_director)

``ChangeMove`` assigns one value to one entity.  ``ChainedChangeMove`` adds the
chain repair around that assignment so that, on both the source and the
destination chain, every entity keeps exactly one predecessor.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import logging
from typing import List, Optional, Tuple

from core.inverse import SingletonInverseVariableSupply
from core.variable import ChainedVariableDescriptor

logger = logging.getLogger(__name__)


class AbstractMove(ABC):
    """Common protocol of every move dispatched by the search loop."""

    @abstractmethod
    def is_move_doable(self, score_director) -> bool:
        """Whether applying the move is legal and useful in the current state."""

    @abstractmethod
    def create_undo_move(self, score_director) -> "AbstractMove":
        """Build the move that reverts this one; call before applying."""

    @abstractmethod
    def _do_move_on_genuine_variables(self, score_director) -> None:
        """Issue the primitive mutations through the score director."""

    def do_move(self, score_director) -> "AbstractMove":
        """Apply the move and return its undo move."""
        undo_move = self.create_undo_move(score_director)
        self._do_move_on_genuine_variables(score_director)
        score_director.trigger_variable_listeners()
        return undo_move

    @property
    def simple_move_type_description(self) -> str:
        return type(self).__name__

    def get_planning_entities(self) -> List[object]:
        return []

    def get_planning_values(self) -> List[object]:
        return []


class ChangeMove(AbstractMove):
    """Assign ``to_planning_value`` to the variable of ``entity``."""

    def __init__(self, entity: object, variable_descriptor: ChainedVariableDescriptor,
                 to_planning_value: Optional[object]) -> None:
        self.entity = entity
        self.variable_descriptor = variable_descriptor
        self.to_planning_value = to_planning_value

    def is_move_doable(self, score_director) -> bool:
        descriptor = self.variable_descriptor
        if not descriptor.is_writable(self.entity):
            return False
        if not descriptor.is_admissible(self.entity, self.to_planning_value):
            return False
        if score_director.move_params.reject_noop_moves:
            return descriptor.get_value(self.entity) is not self.to_planning_value
        return True

    def create_undo_move(self, score_director) -> "ChangeMove":
        old_value = self.variable_descriptor.get_value(self.entity)
        return ChangeMove(self.entity, self.variable_descriptor, old_value)

    def _do_move_on_genuine_variables(self, score_director) -> None:
        score_director.change_variable_facade(self.variable_descriptor, self.entity, self.to_planning_value)

    @property
    def simple_move_type_description(self) -> str:
        return f"{type(self).__name__}({self.variable_descriptor.variable_name})"

    def get_planning_entities(self) -> List[object]:
        return [self.entity]

    def get_planning_values(self) -> List[object]:
        return [self.to_planning_value]

    def _identity(self) -> Tuple[int, int, int]:
        return (id(self.entity), id(self.variable_descriptor), id(self.to_planning_value))

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash((type(self).__name__,) + self._identity())

    def __str__(self) -> str:
        old_value = self.variable_descriptor.get_value(self.entity)
        return f"{self.entity} {{{old_value} -> {self.to_planning_value}}}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.entity!s} -> {self.to_planning_value!s})"


class ChainedChangeMove(ChangeMove):
    """
    Relocate ``entity`` so that it trails ``to_planning_value``.

    Besides the assignment itself the move closes the gap the entity leaves in
    its old chain and lets whoever trailed the target value trail the entity
    instead:

        before: A1 -> e1 -> e2 -> e3    A2 -> e4 -> e5      move (e2, e4)
        after:  A1 -> e1 -> e3          A2 -> e4 -> e2 -> e5

    At most three primitive mutations are issued, in this order:
        1. old trailing entity -> old value of the entity (close the old chain)
        2. entity -> target value
        3. new trailing entity -> entity (reroute the new chain)
    """

    def __init__(self, entity: object, variable_descriptor: ChainedVariableDescriptor,
                 inverse_variable_supply: SingletonInverseVariableSupply,
                 to_planning_value: Optional[object]) -> None:
        super().__init__(entity, variable_descriptor, to_planning_value)
        self.inverse_variable_supply = inverse_variable_supply

    def is_move_doable(self, score_director) -> bool:
        return (super().is_move_doable(score_director)
                and self.entity is not self.to_planning_value)

    def create_undo_move(self, score_director) -> "ChainedChangeMove":
        old_value = self.variable_descriptor.get_value(self.entity)
        return ChainedChangeMove(self.entity, self.variable_descriptor,
                                 self.inverse_variable_supply, old_value)

    def _do_move_on_genuine_variables(self, score_director) -> None:
        descriptor = self.variable_descriptor
        # All reads happen before the first write.
        old_value = descriptor.get_value(self.entity)
        old_trailing_entity = self.inverse_variable_supply.get_inverse_singleton(self.entity)
        new_trailing_entity = (None if self.to_planning_value is None
                               else self.inverse_variable_supply.get_inverse_singleton(self.to_planning_value))
        if new_trailing_entity is self.entity:
            # The entity already trails the target: once the old chain is
            # closed, its old trailing entity is the one behind the target.
            new_trailing_entity = old_trailing_entity
        # A rejected change must surface before the old chain is closed.
        score_director.validate_change(descriptor, self.entity, self.to_planning_value)
        logger.debug(f"[CHAINED CHANGE] {self.entity}: {old_value} -> {self.to_planning_value} "
                     f"(old trailing={old_trailing_entity}, new trailing={new_trailing_entity})")

        # Close the old chain
        if old_trailing_entity is not None:
            score_director.change_variable_facade(descriptor, old_trailing_entity, old_value)
        # Change the entity
        score_director.change_variable_facade(descriptor, self.entity, self.to_planning_value)
        # Reroute the new chain
        if new_trailing_entity is not None:
            score_director.change_variable_facade(descriptor, new_trailing_entity, self.entity)
