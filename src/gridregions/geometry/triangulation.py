"""
Ear-clipping triangulation of simple polygons.

The polygon is assumed clockwise (y-up), matching the outer loops produced by
the polygon loop builder. Pass clockwise=False for counter-clockwise input.

Numeric predicates share one tie-break: anything within EPSILON of zero counts
as "not convex" / "not inside". Collinear corners are therefore never ears and
vertices lying on a candidate ear's edge are not inside it. A vertex on the
ear's closing diagonal (prev -> next) still blocks the ear: grid polygons put
reflex corners exactly there, and clipping through one leaves a remainder that
touches itself.

Failure is never raised. If no ear can be found (self-intersecting or
degenerate input) or the pass limit is reached, the triangles emitted so far
are returned with complete=False.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)

Triangle = Tuple[int, int, int]

EPSILON = 1e-10

# Upper bound on scan passes, as a multiple of the vertex count
MAX_PASS_FACTOR = 4


@dataclass
class TriangulationResult:
    """Triangles as index triples into the input polygon."""
    triangles: List[Triangle] = field(default_factory=list)
    complete: bool = True
    passes: int = 0

    @property
    def triangle_count(self) -> int:
        return len(self.triangles)

    def as_array(self) -> np.ndarray:
        """Triangles as a (M, 3) uint32 array."""
        if not self.triangles:
            return np.zeros((0, 3), dtype=np.uint32)
        return np.array(self.triangles, dtype=np.uint32)


def cross_2d(a: Sequence[float], b: Sequence[float], c: Sequence[float]) -> float:
    """Z component of (b - a) x (c - b)."""
    return (b[0] - a[0]) * (c[1] - b[1]) - (b[1] - a[1]) * (c[0] - b[0])


def is_convex(prev: Sequence[float], curr: Sequence[float], nxt: Sequence[float],
              clockwise: bool = True) -> bool:
    """Check if the turn at curr is convex for the given winding.

    Zero-area (collinear) corners are not convex.
    """
    cross = cross_2d(prev, curr, nxt)
    return cross < -EPSILON if clockwise else cross > EPSILON


def point_in_triangle(p: Sequence[float], a: Sequence[float],
                      b: Sequence[float], c: Sequence[float]) -> bool:
    """Check if p lies strictly inside triangle abc.

    Points on an edge or on a corner are outside. Works for either winding.
    """
    def sign(p1, p2, p3):
        return (p1[0] - p3[0]) * (p2[1] - p3[1]) - (p2[0] - p3[0]) * (p1[1] - p3[1])

    d1 = sign(p, a, b)
    d2 = sign(p, b, c)
    d3 = sign(p, c, a)

    if abs(d1) < EPSILON or abs(d2) < EPSILON or abs(d3) < EPSILON:
        return False

    has_neg = (d1 < 0) or (d2 < 0) or (d3 < 0)
    has_pos = (d1 > 0) or (d2 > 0) or (d3 > 0)
    return not (has_neg and has_pos)


def on_segment(p: Sequence[float], a: Sequence[float], b: Sequence[float]) -> bool:
    """Check if p lies on segment ab (endpoints included)."""
    if abs(cross_2d(a, p, b)) >= EPSILON:
        return False
    return (p[0] - a[0]) * (b[0] - p[0]) + (p[1] - a[1]) * (b[1] - p[1]) >= -EPSILON


def _is_ear(points: np.ndarray, indices: List[int], i: int, clockwise: bool) -> bool:
    n = len(indices)
    prev_idx = indices[(i - 1) % n]
    curr_idx = indices[i]
    next_idx = indices[(i + 1) % n]

    a, b, c = points[prev_idx], points[curr_idx], points[next_idx]
    if not is_convex(a, b, c, clockwise):
        return False

    for idx in indices:
        if idx in (prev_idx, curr_idx, next_idx):
            continue
        p = points[idx]
        if point_in_triangle(p, a, b, c) or on_segment(p, a, c):
            return False
    return True


def ear_clip(polygon: Sequence[Sequence[float]], clockwise: bool = True) -> TriangulationResult:
    """Triangulate a simple polygon by ear clipping.

    Args:
        polygon: Ordered 2D vertices (x, y); at least 3 are needed
        clockwise: Winding of the polygon (y-up)

    Returns:
        TriangulationResult; a convex polygon of N vertices yields N - 2 triangles
    """
    points = np.asarray(polygon, dtype=np.float64).reshape(-1, 2) if len(polygon) else np.zeros((0, 2))
    n = len(points)
    if n < 3:
        return TriangulationResult(complete=False)

    indices = list(range(n))
    result = TriangulationResult()
    max_passes = MAX_PASS_FACTOR * n

    while len(indices) > 2:
        if result.passes >= max_passes:
            logger.warning("Ear clipping hit the pass limit (%d) with %d vertices left",
                           max_passes, len(indices))
            result.complete = False
            break
        result.passes += 1

        ear = -1
        for i in range(len(indices)):
            if _is_ear(points, indices, i, clockwise):
                ear = i
                break

        if ear < 0:
            logger.warning("No ear found with %d of %d vertices left; returning %d triangle(s)",
                           len(indices), n, len(result.triangles))
            result.complete = False
            break

        m = len(indices)
        result.triangles.append((indices[(ear - 1) % m], indices[ear], indices[(ear + 1) % m]))
        indices.pop(ear)

    logger.debug("Ear clipping: %d vertices -> %d triangles in %d passes",
                 n, len(result.triangles), result.passes)
    return result


def triangulate_polygon(polygon: Sequence[Sequence[float]], clockwise: bool = True) -> List[Triangle]:
    """Flat list of index triples; possibly partial on malformed input."""
    return ear_clip(polygon, clockwise).triangles
