"""
Chain data structures
=====================
Anchors, chained entities and the working solution that holds them.

A chained planning variable stores, on every entity, its immediate
predecessor.  Following predecessors always ends at an anchor, so a set of
entities forms one chain per anchor::

    A1 -> e1 -> e2 -> e3
    A2 -> e4

Design notes:
    - Anchors and entities compare by identity.  Entities are mutated while
      they sit in dictionaries and sets, so value equality would be unsafe.
    - The successor direction is never stored on the entity; it is answered
      by ``core.inverse.SingletonInverseVariableSupply``.
    - The helpers below only read the model; every write goes through the
      score director.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

if TYPE_CHECKING:
    from core.inverse import SingletonInverseVariableSupply
    from core.variable import ChainedVariableDescriptor


# ========== Anchor ==========

@dataclass(frozen=True, eq=False)
class Anchor:
    """
    Head of a chain (a vehicle, a depot, a machine...).

    An anchor has no chained variable of its own but may have a trailing
    entity.
    """
    anchor_id: str
    coordinates: Tuple[float, float] = (0.0, 0.0)

    def __str__(self) -> str:
        return self.anchor_id

    def __repr__(self) -> str:
        return f"Anchor(id={self.anchor_id!r}, pos={self.coordinates})"


# ========== Chained entity ==========

@dataclass(eq=False)
class ChainedEntity:
    """
    Planning entity carrying the chained variable.

    Attributes:
        entity_id: stable handle used for lookups and snapshots
        coordinates: position used by the distance score
        previous: the chained variable (an Anchor, another ChainedEntity or None)
        pinned: pinned entities are never moved
    """
    entity_id: str
    coordinates: Tuple[float, float] = (0.0, 0.0)
    previous: Optional[object] = field(default=None, repr=False)
    pinned: bool = False

    def __str__(self) -> str:
        return self.entity_id

    def __repr__(self) -> str:
        return f"ChainedEntity(id={self.entity_id!r}, previous={_label(self.previous)})"


def _label(value: Optional[object]) -> str:
    if value is None:
        return "None"
    return str(getattr(value, "entity_id", None) or getattr(value, "anchor_id", None) or value)


# ========== Working solution ==========

@dataclass
class ChainedSolution:
    """
    Working solution: every anchor and every entity of the problem.

    The solution only stores the objects; the chained variable values live
    on the entities themselves.
    """
    anchors: List[Anchor] = field(default_factory=list)
    entities: List[ChainedEntity] = field(default_factory=list)

    def __post_init__(self):
        ids = [a.anchor_id for a in self.anchors] + [e.entity_id for e in self.entities]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate anchor/entity ids in solution: {ids}")

    def get_anchor(self, anchor_id: str) -> Anchor:
        for anchor in self.anchors:
            if anchor.anchor_id == anchor_id:
                return anchor
        raise ValueError(f"Unknown anchor: {anchor_id}")

    def get_entity(self, entity_id: str) -> ChainedEntity:
        for entity in self.entities:
            if entity.entity_id == entity_id:
                return entity
        raise ValueError(f"Unknown entity: {entity_id}")

    def get_value_range(self) -> List[object]:
        """All values the chained variable may take (anchors first)."""
        return [*self.anchors, *self.entities]

    def snapshot(self) -> Dict[str, Optional[str]]:
        """Map every entity id to the id of its predecessor (None if unassigned)."""
        return {entity.entity_id: _label(entity.previous) if entity.previous is not None else None
                for entity in self.entities}

    def describe_chains(self, inverse_supply: "SingletonInverseVariableSupply") -> List[str]:
        """
        Render one line per anchor, e.g. ``A1 -> e1 -> e2``.

        Unassigned entities are appended as ``unassigned: e5, e6``.
        """
        lines = []
        for anchor in self.anchors:
            chain = walk_chain(anchor, inverse_supply, max_length=len(self.entities))
            lines.append(" -> ".join([str(anchor)] + [str(e) for e in chain]))
        unassigned = [str(e) for e in self.entities if e.previous is None]
        if unassigned:
            lines.append("unassigned: " + ", ".join(unassigned))
        return lines


# ========== Chain queries ==========

def walk_chain(anchor: Anchor,
               inverse_supply: "SingletonInverseVariableSupply",
               max_length: Optional[int] = None) -> List[object]:
    """
    Follow trailing entities from an anchor to the tail of its chain.

    Args:
        anchor: head of the chain
        inverse_supply: answers "who points at X"
        max_length: stop with ValueError after this many entities (cycle guard)

    Returns:
        the entities of the chain in order, anchor excluded
    """
    chain = []
    current = inverse_supply.get_inverse_singleton(anchor)
    while current is not None:
        if max_length is not None and len(chain) >= max_length:
            raise ValueError(f"Chain of {anchor} exceeds {max_length} entities (cycle?)")
        chain.append(current)
        current = inverse_supply.get_inverse_singleton(current)
    return chain


def find_anchor(entity: object, descriptor: "ChainedVariableDescriptor",
                max_length: int = 100_000) -> Optional[object]:
    """Return the anchor at the head of the entity's chain, None if unassigned."""
    value = descriptor.get_value(entity)
    steps = 0
    while value is not None and descriptor.is_entity(value):
        steps += 1
        if steps > max_length or value is entity:
            raise ValueError(f"Cycle detected while looking up the anchor of {entity}")
        value = descriptor.get_value(value)
    return value


def validate_chains(solution: ChainedSolution,
                    descriptor: "ChainedVariableDescriptor") -> List[str]:
    """
    Check chain integrity and successor uniqueness.

    Returns a list of human-readable violations, empty when the solution is
    well formed:
        - every assigned entity points at an anchor or an entity of the solution
        - following predecessors reaches an anchor without a cycle
        - no two entities share the same predecessor
        - unassigned entities only when the variable is nullable
    """
    violations: List[str] = []
    known = {id(value) for value in solution.get_value_range()}
    pointed_at: Dict[int, object] = {}

    for entity in solution.entities:
        value = descriptor.get_value(entity)
        if value is None:
            if not descriptor.nullable:
                violations.append(f"{entity} is unassigned but the variable is not nullable")
            continue
        if id(value) not in known:
            violations.append(f"{entity} points at {_label(value)} which is not part of the solution")
            continue
        other = pointed_at.get(id(value))
        if other is not None:
            violations.append(f"{entity} and {other} both point at {_label(value)}")
        else:
            pointed_at[id(value)] = entity

    limit = len(solution.entities)
    for entity in solution.entities:
        start = descriptor.get_value(entity)
        value = start
        steps = 0
        while value is not None and descriptor.is_entity(value) and id(value) in known:
            steps += 1
            if steps > limit:
                violations.append(f"{entity} is part of a cycle")
                break
            value = descriptor.get_value(value)
        if value is None and start is not None and steps > 0:
            violations.append(f"{entity} is behind an unassigned entity")

    return violations


def assert_valid_chains(solution: ChainedSolution, descriptor: "ChainedVariableDescriptor"):
    """Raise ValueError listing every violation found by ``validate_chains``."""
    violations = validate_chains(solution, descriptor)
    if violations:
        raise ValueError("Corrupted chains:\n  " + "\n  ".join(violations))
