"""
Door/window connectors between adjacent regions.
"""

from .connector_graph import (
    ConnectorType,
    ResolvedNeighbor,
    RegionConnector,
    ConnectorContainer,
    ConnectorGraph,
    resolve_neighbor,
)

__all__ = [
    'ConnectorType',
    'ResolvedNeighbor',
    'RegionConnector',
    'ConnectorContainer',
    'ConnectorGraph',
    'resolve_neighbor',
]
