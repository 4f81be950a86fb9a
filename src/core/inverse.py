"""Singleton inverse relation for the chained variable.

For every value X (anchor or entity) the supply answers which entity currently
points at X, i.e. the trailing entity of X.  The chain invariant guarantees at
most one such entity, so the index maps each value to a single entity.

The supply is registered as a variable listener on the score director: it
retracts an entity's entry right before the chained variable changes and
re-inserts it right after.  Keys are object identities so entities can be
indexed while they are being mutated.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Tuple

from core.variable import ChainedVariableDescriptor

logger = logging.getLogger(__name__)


class SingletonInverseVariableSupply:
    """O(1) ``value -> trailing entity`` index kept current by variable events."""

    def __init__(self, descriptor: ChainedVariableDescriptor) -> None:
        self.descriptor = descriptor
        # id(value) -> (value, trailing entity)
        self._inverse: Dict[int, Tuple[object, object]] = {}

    def reset_working_solution(self, entities: Iterable[object]) -> None:
        """Rebuild the index from scratch."""
        self._inverse.clear()
        for entity in entities:
            self._insert(entity)
        logger.debug(f"[INVERSE] Rebuilt index with {len(self._inverse)} entries")

    # ========== Variable listener ==========

    def before_variable_changed(self, descriptor: ChainedVariableDescriptor, entity: object) -> None:
        if descriptor is self.descriptor:
            self._retract(entity)

    def after_variable_changed(self, descriptor: ChainedVariableDescriptor, entity: object) -> None:
        if descriptor is self.descriptor:
            self._insert(entity)

    # ========== Lookup ==========

    def get_inverse_singleton(self, value: object) -> Optional[object]:
        """Return the entity whose chained variable is ``value``, or None."""
        entry = self._inverse.get(id(value))
        return entry[1] if entry is not None else None

    def snapshot(self) -> Dict[int, int]:
        """``id(value) -> id(trailing entity)``; used by consistency assertions."""
        return {key: id(entity) for key, (_, entity) in self._inverse.items()}

    def __len__(self) -> int:
        return len(self._inverse)

    # ========== Internals ==========

    def _insert(self, entity: object) -> None:
        value = self.descriptor.get_value(entity)
        if value is None:
            return
        existing = self._inverse.get(id(value))
        if existing is not None and existing[1] is not entity:
            logger.error(f"[INVERSE] {existing[1]} and {entity} both point at {value}")
            raise RuntimeError(
                f"The inverse supply is corrupted: entity ({entity}) cannot point at value ({value}) "
                f"because entity ({existing[1]}) already does."
            )
        self._inverse[id(value)] = (value, entity)

    def _retract(self, entity: object) -> None:
        value = self.descriptor.get_value(entity)
        if value is None:
            return
        existing = self._inverse.get(id(value))
        if existing is None or existing[1] is not entity:
            logger.error(f"[INVERSE] Retracting {entity} from {value} but the index holds {existing}")
            raise RuntimeError(
                f"The inverse supply is corrupted: entity ({entity}) for value ({value}) "
                f"was never inserted."
            )
        del self._inverse[id(value)]
