"""Moves, score director and score calculation for chained variables."""

from planner.moves import AbstractMove, ChainedChangeMove, ChangeMove
from planner.score import ChainDistanceScoreCalculator
from planner.score_director import ScoreDirector, VariableChange

__all__ = [
    "AbstractMove",
    "ChainedChangeMove",
    "ChangeMove",
    "ChainDistanceScoreCalculator",
    "ScoreDirector",
    "VariableChange",
]
