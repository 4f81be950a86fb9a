"""Descriptor for the chained planning variable.

The descriptor is the only place that knows how the chained variable is
stored on an entity.  Moves read through :meth:`ChainedVariableDescriptor.get_value`
and ask :meth:`ChainedVariableDescriptor.is_admissible` before proposing a
value; writes are reserved to the score director so incremental scoring and
the inverse index never miss a change.
"""

from __future__ import annotations

from typing import Iterable, Optional, Type

from core.chain import ChainedEntity


class ChainedVariableDescriptor:
    """Read/write access and admissibility rules for a chained variable."""

    def __init__(
        self,
        variable_name: str = "previous",
        *,
        entity_type: Type = ChainedEntity,
        value_range: Optional[Iterable[object]] = None,
        nullable: bool = False,
    ) -> None:
        if not variable_name:
            raise ValueError("variable_name must not be empty")
        self.variable_name = variable_name
        self.entity_type = entity_type
        self.nullable = nullable
        self._value_range_ids: Optional[set] = None
        if value_range is not None:
            self.set_value_range(value_range)

    # ========== Value access ==========

    def get_value(self, entity: object) -> Optional[object]:
        return getattr(entity, self.variable_name)

    def set_value(self, entity: object, value: Optional[object]) -> None:
        """Raw write. Only the score director should call this."""
        setattr(entity, self.variable_name, value)

    # ========== Classification ==========

    def is_entity(self, value: object) -> bool:
        return isinstance(value, self.entity_type)

    def is_anchor(self, value: object) -> bool:
        return value is not None and not self.is_entity(value)

    # ========== Doability support ==========

    @property
    def has_value_range(self) -> bool:
        return self._value_range_ids is not None

    def set_value_range(self, values: Iterable[object]) -> None:
        """Replace the value range; membership is checked by identity."""
        self._value_range_ids = {id(value) for value in values}

    def is_writable(self, entity: object) -> bool:
        """Pinned entities keep their current value."""
        return self.is_entity(entity) and not getattr(entity, "pinned", False)

    def is_admissible(self, entity: object, value: Optional[object]) -> bool:
        """Whether ``value`` may be assigned to ``entity`` under the value range."""
        if value is None:
            return self.nullable
        if self._value_range_ids is not None and id(value) not in self._value_range_ids:
            return False
        return True

    def __repr__(self) -> str:
        return f"ChainedVariableDescriptor({self.entity_type.__name__}.{self.variable_name})"
