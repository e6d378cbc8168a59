"""
Polygon loop builder: orders an unordered boundary edge set into closed loops.

Every edge is turned into a directed segment between integer lattice corners,
oriented clockwise around its owning cell (see GridEdge.corner_points). For
a perimeter this means outer boundaries come out clockwise and holes come out
counter-clockwise (y-up), with the region interior always on the right.

Walk rules:
- Loops start at the smallest unused segment, ordered by (x, y) of its start
  corner, so the first loop starts at the lexicographically smallest vertex.
- At a corner with several unused outgoing segments (two cells touching only
  at a corner), the walk takes the sharpest right turn first, then straight,
  then left. This keeps diagonally touching cells in separate simple loops.
- A walk that cannot continue before returning to its start yields an open
  loop (closed=False). That only happens for edge sets that are not a
  perimeter.
- Collinear vertices are removed and each closed loop is rotated to start at
  its smallest vertex.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set, Tuple

from ..regions.data_model import GridEdge

logger = logging.getLogger(__name__)

Vec2 = Tuple[float, float]
Corner = Tuple[int, int]
Segment = Tuple[Corner, Corner]


@dataclass
class PolygonLoop:
    """An ordered vertex loop in world space."""
    points: List[Vec2] = field(default_factory=list)
    closed: bool = True

    def __len__(self) -> int:
        return len(self.points)

    @property
    def signed_area(self) -> float:
        """Shoelace area. Negative = clockwise (y-up)."""
        n = len(self.points)
        area = 0.0
        for i in range(n):
            x0, y0 = self.points[i]
            x1, y1 = self.points[(i + 1) % n]
            area += x0 * y1 - x1 * y0
        return area / 2.0

    @property
    def is_clockwise(self) -> bool:
        return self.signed_area < 0

    @property
    def is_hole(self) -> bool:
        """Counter-clockwise closed loops bound holes in a perimeter."""
        return self.closed and self.signed_area > 0


def _turn_rank(prev: Corner, curr: Corner, nxt: Corner) -> int:
    """0 = right turn, 1 = straight, 2 = left turn, 3 = U-turn."""
    dx0, dy0 = curr[0] - prev[0], curr[1] - prev[1]
    dx1, dy1 = nxt[0] - curr[0], nxt[1] - curr[1]
    cross = dx0 * dy1 - dy0 * dx1
    if cross < 0:
        return 0
    if cross > 0:
        return 2
    return 1 if (dx0 * dx1 + dy0 * dy1) > 0 else 3


def _pick_next(prev: Corner, curr: Corner, candidates: List[Corner]) -> Corner:
    return min(candidates, key=lambda n: (_turn_rank(prev, curr, n), n))


def _remove_collinear(corners: List[Corner]) -> List[Corner]:
    """Drop vertices that continue straight on from the previous segment."""
    n = len(corners)
    if n < 3:
        return list(corners)

    kept = []
    for i in range(n):
        prev = corners[i - 1]
        curr = corners[i]
        nxt = corners[(i + 1) % n]
        if _turn_rank(prev, curr, nxt) != 1:
            kept.append(curr)
    return kept


def _rotate_to_min(corners: List[Corner]) -> List[Corner]:
    if not corners:
        return corners
    start = corners.index(min(corners))
    return corners[start:] + corners[:start]


def _trace_corner_loops(edges: Iterable[GridEdge]) -> List[Tuple[List[Corner], bool]]:
    """Walk directed segments into corner loops. Returns (corners, closed) pairs."""
    segments: Set[Segment] = {edge.corner_points() for edge in set(edges)}
    outgoing: Dict[Corner, List[Corner]] = {}
    for start, end in segments:
        outgoing.setdefault(start, []).append(end)

    unused = set(segments)
    loops: List[Tuple[List[Corner], bool]] = []

    while unused:
        first = min(unused)
        unused.discard(first)
        origin, curr = first
        prev = origin
        corners = [origin]
        closed = False

        while True:
            candidates = [n for n in outgoing.get(curr, []) if (curr, n) in unused]
            if curr == origin:
                # Closing is only right if the first segment is the turn we would take
                if not candidates or _pick_next(prev, curr, candidates + [first[1]]) == first[1]:
                    closed = True
                    break
            if not candidates:
                corners.append(curr)
                break

            corners.append(curr)
            nxt = _pick_next(prev, curr, candidates)
            unused.discard((curr, nxt))
            prev, curr = curr, nxt

        loops.append((corners, closed))

    return loops


def build_polygon_loops(edges: Iterable[GridEdge], cell_size: float) -> List[PolygonLoop]:
    """Order an edge set into polygon loops.

    Args:
        edges: Boundary edges (typically a region perimeter)
        cell_size: World size of one cell

    Returns:
        All loops, in order of their smallest starting segment. For a
        perimeter: outer boundaries clockwise, holes counter-clockwise.
    """
    loops = []
    for corners, closed in _trace_corner_loops(edges):
        if closed:
            corners = _rotate_to_min(_remove_collinear(corners))
        else:
            logger.warning("Edge chain starting at %s does not close", corners[0])
        points = [(x * cell_size, y * cell_size) for x, y in corners]
        loops.append(PolygonLoop(points=points, closed=closed))
    return loops


def build_polygon_loop(edges: Iterable[GridEdge], cell_size: float) -> List[Vec2]:
    """Return the loop through the lexicographically smallest vertex.

    For a perimeter this is always an outer boundary. Other loops (holes,
    further islands) are available from build_polygon_loops.
    """
    loops = build_polygon_loops(edges, cell_size)
    if not loops:
        return []
    if len(loops) > 1:
        logger.debug("Edge set has %d loops, returning the first", len(loops))
    return loops[0].points

