"""Distance helpers shared by the chain scoring layer.

Provides Manhattan and Euclidean metrics on planar coordinates plus a small
registry so the metric can be chosen from configuration by name.
"""

from typing import Callable, Dict, Tuple
import math

Coordinates = Tuple[float, float]
DistanceFunc = Callable[[float, float, float, float], float]


# Basic distance calculation functions
def euclidean_distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """
    Straight-line distance between two points.

    Formula: d = √[(x2-x1)² + (y2-y1)²]
    """
    return math.sqrt((x2 - x1) ** 2 + (y2 - y1) ** 2)


def manhattan_distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """
    Grid distance between two points.

    Formula: d = |x2-x1| + |y2-y1|
    """
    return abs(x2 - x1) + abs(y2 - y1)


DISTANCE_FUNCTIONS: Dict[str, DistanceFunc] = {
    "euclidean": euclidean_distance,
    "manhattan": manhattan_distance,
}


def get_distance_function(metric: str) -> DistanceFunc:
    """Look up a metric by its configuration name."""
    try:
        return DISTANCE_FUNCTIONS[metric]
    except KeyError:
        raise ValueError(
            f"Unknown distance metric: {metric!r} (expected one of {sorted(DISTANCE_FUNCTIONS)})"
        ) from None


def coordinate_distance(a: Coordinates, b: Coordinates,
                        distance_func: DistanceFunc = euclidean_distance) -> float:
    """Distance between two ``(x, y)`` tuples."""
    return distance_func(a[0], a[1], b[0], b[1])
