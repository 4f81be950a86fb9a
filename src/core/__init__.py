"""Chain model: anchors, entities, the chained variable and its inverse index."""

from core.chain import (
    Anchor,
    ChainedEntity,
    ChainedSolution,
    assert_valid_chains,
    find_anchor,
    validate_chains,
    walk_chain,
)
from core.inverse import SingletonInverseVariableSupply
from core.variable import ChainedVariableDescriptor

__all__ = [
    "Anchor",
    "ChainedEntity",
    "ChainedSolution",
    "assert_valid_chains",
    "find_anchor",
    "validate_chains",
    "walk_chain",
    "SingletonInverseVariableSupply",
    "ChainedVariableDescriptor",
]
