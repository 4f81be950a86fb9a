"""Configuration defaults for the chained move planner."""

from config.defaults import (
    ChainScoreParams,
    MoveParams,
    ScoreDirectorParams,
    SolverParameters,
    DEFAULT_CHAIN_SCORE_PARAMS,
    DEFAULT_MOVE_PARAMS,
    DEFAULT_SCORE_DIRECTOR_PARAMS,
    DEFAULT_SOLVER_PARAMETERS,
    DEBUG_SOLVER_PARAMETERS,
    SOLVER_PARAMETER_PRESETS,
)

__all__ = [
    "ChainScoreParams",
    "MoveParams",
    "ScoreDirectorParams",
    "SolverParameters",
    "DEFAULT_CHAIN_SCORE_PARAMS",
    "DEFAULT_MOVE_PARAMS",
    "DEFAULT_SCORE_DIRECTOR_PARAMS",
    "DEFAULT_SOLVER_PARAMETERS",
    "DEBUG_SOLVER_PARAMETERS",
    "SOLVER_PARAMETER_PRESETS",
]
