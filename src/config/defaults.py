"""Central repository for tunable move, scoring, and score director defaults.

Values that influence how moves are judged doable, how the working solution is
scored, and how much bookkeeping the score director performs are collected
here so they can be updated from a single location without touching the
algorithmic code.  The constants are exposed as frozen dataclasses to provide
structure and discoverability while keeping them easily serialisable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict


@dataclass(frozen=True)
class MoveParams:
    """Doability switches shared by the change move family.

    ``reject_noop_moves`` makes ``ChangeMove`` refuse a move whose target is
    already the entity's current value.  The chained variant is always safe to
    apply in that situation (the three mutations cancel out), so the default
    keeps such moves doable.
    """

    reject_noop_moves: bool = False


@dataclass(frozen=True)
class ScoreDirectorParams:
    """Bookkeeping performed by the score director around each mutation."""

    track_journal: bool = True
    assert_inverse_consistency: bool = False


@dataclass(frozen=True)
class ChainScoreParams:
    """Weight configuration for the chain distance score."""

    distance_metric: str = "euclidean"
    unassigned_penalty: float = 10_000.0


@dataclass(frozen=True)
class SolverParameters:
    """Bundle of configuration blocks consumed by the score director."""

    moves: MoveParams = field(default_factory=MoveParams)
    score_director: ScoreDirectorParams = field(default_factory=ScoreDirectorParams)
    score: ChainScoreParams = field(default_factory=ChainScoreParams)


DEFAULT_MOVE_PARAMS = MoveParams()
DEFAULT_SCORE_DIRECTOR_PARAMS = ScoreDirectorParams()
DEFAULT_CHAIN_SCORE_PARAMS = ChainScoreParams()
DEFAULT_SOLVER_PARAMETERS = SolverParameters()
# Used by the regression tests to exercise the consistency assertions.
DEBUG_SOLVER_PARAMETERS = SolverParameters(
    score_director=ScoreDirectorParams(track_journal=True, assert_inverse_consistency=True),
)
SOLVER_PARAMETER_PRESETS: Dict[str, SolverParameters] = {
    "default": DEFAULT_SOLVER_PARAMETERS,
    "debug": DEBUG_SOLVER_PARAMETERS,
    "strict": SolverParameters(
        moves=MoveParams(reject_noop_moves=True),
        score_director=ScoreDirectorParams(track_journal=False, assert_inverse_consistency=True),
    ),
}
