"""
Connector graph: typed links between adjacent regions across shared edges.

A connector is keyed by (RegionA, EdgeA); no two connectors share that pair.
The opposite side (RegionB, CellB, EdgeB) is a cache of what lies across
EdgeA and is only guaranteed fresh right after rebuild_all(). Region edits
made since then can leave it stale until the next rebuild or garbage
collection pass.

Connectors never own regions. Lookups of "which region owns this cell" go
through the caller-supplied RegionContext.

Connector lifecycle at an edge (cycle_at_edge):
    absent -> DOOR -> WINDOW -> absent
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from ..regions.data_model import CellCoord, GridEdge, Region, RegionContext

logger = logging.getLogger(__name__)

Vec2 = Tuple[float, float]
Segment = Tuple[Vec2, Vec2]


class ConnectorType(Enum):
    """Kind of opening a connector represents."""
    DOOR = "door"
    WINDOW = "window"


@dataclass(frozen=True)
class ResolvedNeighbor:
    """What lies across a connector's edge.

    edge is None when the neighboring region has no matching boundary edge
    (its cell is there but the facing side is not on its perimeter).
    """
    region: Region
    cell: CellCoord
    edge: Optional[GridEdge] = None


@dataclass(eq=False)
class RegionConnector:
    """Directed link from an edge of RegionA to whatever lies across it.

    Equality and hashing use (RegionA, EdgeA) only.
    """
    region_a: Optional[Region]
    edge_a: GridEdge
    connector_type: ConnectorType = ConnectorType.DOOR
    neighbor: Optional[ResolvedNeighbor] = None

    @property
    def key(self) -> Tuple[Optional[str], GridEdge]:
        return (self.region_a.id if self.region_a is not None else None, self.edge_a)

    def __eq__(self, other):
        if not isinstance(other, RegionConnector):
            return False
        return self.region_a is other.region_a and self.edge_a == other.edge_a

    def __hash__(self):
        return hash(self.key)

    @property
    def region_b(self) -> Optional[Region]:
        return self.neighbor.region if self.neighbor is not None else None

    @property
    def cell_b(self) -> Optional[CellCoord]:
        return self.neighbor.cell if self.neighbor is not None else None

    @property
    def edge_b(self) -> Optional[GridEdge]:
        return self.neighbor.edge if self.neighbor is not None else None

    @property
    def is_outside(self) -> bool:
        """True when nothing lies across EdgeA."""
        return self.neighbor is None

    def matches(self, region: Region, edge: GridEdge) -> bool:
        return self.region_a is region and self.edge_a == edge

    def link_segments(self, cell_size: float) -> Tuple[Segment, Segment, Vec2]:
        """Geometry for drawing the link.

        Returns:
            Two segments joining EdgeA's endpoints to EdgeB's endpoints, and
            EdgeA's midpoint. Without a concrete EdgeB, EdgeA's own endpoints
            stand in for it (zero-length segments).
        """
        a0, a1 = self.edge_a.world_vertices(cell_size)
        edge_b = self.edge_b
        if edge_b is not None:
            b0, b1 = edge_b.world_vertices(cell_size)
        else:
            b0, b1 = a0, a1
        mid = ((a0[0] + a1[0]) * 0.5, (a0[1] + a1[1]) * 0.5)
        return (a0, b0), (a1, b1), mid


def resolve_neighbor(edge: GridEdge, context: RegionContext) -> Optional[ResolvedNeighbor]:
    """Find the region and matching edge across a boundary edge.

    Returns:
        None if no region owns the neighboring cell; otherwise the region,
        the neighboring cell and, if the region's perimeter has it, the
        facing edge (neighbor cell, opposite side)
    """
    neighbor_cell = edge.neighbor_cell()
    region_b = context.region_at_cell(neighbor_cell)
    if region_b is None:
        return None

    expected = edge.facing_edge()
    edge_b = expected if region_b.has_perimeter_edge(expected) else None
    return ResolvedNeighbor(region=region_b, cell=neighbor_cell, edge=edge_b)


@dataclass
class ConnectorContainer:
    """Caller-owned collection of connectors."""
    _connectors: List[RegionConnector] = field(default_factory=list)

    @property
    def connectors(self) -> Tuple[RegionConnector, ...]:
        return tuple(self._connectors)

    def __len__(self) -> int:
        return len(self._connectors)

    def __iter__(self) -> Iterator[RegionConnector]:
        return iter(list(self._connectors))

    def find(self, region: Region, edge: GridEdge) -> Optional[RegionConnector]:
        for c in self._connectors:
            if c.matches(region, edge):
                return c
        return None

    def add(self, connector: RegionConnector) -> bool:
        """Add a connector. Returns False if (RegionA, EdgeA) is already taken."""
        if connector in self._connectors:
            return False
        self._connectors.append(connector)
        return True

    def remove(self, connector: RegionConnector) -> bool:
        for i, c in enumerate(self._connectors):
            if c is connector:
                del self._connectors[i]
                return True
        return False

    def replace_all(self, connectors: List[RegionConnector]):
        """Replace the whole collection, keeping the first of any duplicates."""
        unique: List[RegionConnector] = []
        for c in connectors:
            if c not in unique:
                unique.append(c)
        self._connectors = unique

    def on_region_updated(self, region: Region) -> List[RegionConnector]:
        """Remove connectors invalidated by a region losing cells.

        Drops connectors whose RegionA is this region and no longer contains
        EdgeA's cell, and connectors whose cached RegionB is this region and
        no longer contains CellB.
        """
        to_remove = []
        for c in self._connectors:
            if c.region_a is region and not region.contains_cell(c.edge_a.cell):
                to_remove.append(c)
            elif (c.region_b is region and c.cell_b is not None
                    and not region.contains_cell(c.cell_b)):
                to_remove.append(c)

        for c in to_remove:
            self.remove(c)
        return to_remove

    def on_region_removed(self, region: Region) -> List[RegionConnector]:
        """Remove every connector that references a deleted region."""
        to_remove = [c for c in self._connectors
                     if c.region_a is region or c.region_b is region]
        for c in to_remove:
            self.remove(c)
        return to_remove


class ConnectorGraph:
    """Operations on a connector collection against live region data.

    Holds references to the caller's container and context, never copies.
    """

    def __init__(self, connectors: ConnectorContainer, context: RegionContext):
        self.connectors = connectors
        self.context = context

    def find(self, region: Region, edge: GridEdge) -> Optional[RegionConnector]:
        return self.connectors.find(region, edge)

    def create_connector(self, region: Region, edge: GridEdge,
                         connector_type: ConnectorType = ConnectorType.DOOR
                         ) -> Optional[RegionConnector]:
        """Create a connector at an edge unless one already exists there.

        Returns:
            The new connector, or None if (region, edge) is already connected
        """
        if self.connectors.find(region, edge) is not None:
            return None

        connector = RegionConnector(
            region_a=region,
            edge_a=edge,
            connector_type=connector_type,
            neighbor=resolve_neighbor(edge, self.context),
        )
        self.connectors.add(connector)
        return connector

    def cycle_at_edge(self, region: Region, edge: GridEdge) -> Optional[ConnectorType]:
        """Advance the connector at an edge: absent -> DOOR -> WINDOW -> absent.

        Returns:
            The connector type now at the edge, or None if it was removed
        """
        existing = self.connectors.find(region, edge)
        if existing is None:
            self.create_connector(region, edge, ConnectorType.DOOR)
            return ConnectorType.DOOR

        if existing.connector_type == ConnectorType.DOOR:
            existing.connector_type = ConnectorType.WINDOW
            return ConnectorType.WINDOW

        self.connectors.remove(existing)
        return None

    def _drop_reason(self, connector: RegionConnector) -> Optional[str]:
        region_a = connector.region_a
        if region_a is None:
            return "RegionA missing"
        if not region_a.contains_cell(connector.edge_a.cell):
            return "RegionA no longer contains the edge cell"
        if not region_a.has_perimeter_edge(connector.edge_a):
            return "edge is no longer on RegionA's perimeter"
        return None

    def rebuild_all(self) -> List[RegionConnector]:
        """Re-validate every connector and refresh its opposite side.

        Connectors whose RegionA is gone, no longer holds EdgeA's cell, or no
        longer has EdgeA on its perimeter are dropped. The rest keep their
        type and get RegionB/CellB/EdgeB resolved again. Idempotent when
        regions are not edited in between.

        Returns:
            The dropped connectors
        """
        rebuilt: List[RegionConnector] = []
        dropped: List[RegionConnector] = []

        for c in self.connectors:
            reason = self._drop_reason(c)
            if reason is not None:
                logger.debug("Dropping connector at %s: %s", c.edge_a, reason)
                dropped.append(c)
                continue

            rebuilt.append(RegionConnector(
                region_a=c.region_a,
                edge_a=c.edge_a,
                connector_type=c.connector_type,
                neighbor=resolve_neighbor(c.edge_a, self.context),
            ))

        self.connectors.replace_all(rebuilt)
        logger.info("Rebuilt connectors: %d kept, %d dropped", len(rebuilt), len(dropped))
        return dropped

    def collect_garbage(self, region: Optional[Region] = None) -> List[RegionConnector]:
        """Remove connectors invalidated by shrinking regions.

        Args:
            region: The region whose cell set shrank, or None to check every
                connector against its own RegionA and cached RegionB

        Returns:
            The removed connectors
        """
        if region is not None:
            return self.connectors.on_region_updated(region)

        removed = []
        for c in self.connectors:
            if c.region_a is not None and not c.region_a.contains_cell(c.edge_a.cell):
                removed.append(c)
            elif (c.region_b is not None and c.cell_b is not None
                    and not c.region_b.contains_cell(c.cell_b)):
                removed.append(c)

        for c in removed:
            self.connectors.remove(c)
        return removed
