"""
Diagnostics for region geometry.

Public API:
    - ValidationResult, ValidationIssue, Severity: Core result types
    - Issue codes reported by the region and mesh code
"""

from .core import (
    Severity,
    ValidationIssue,
    ValidationResult,
    REGION_MULTIPLE_ISLANDS,
    MESH_MALFORMED_POLYGON,
    MESH_INCOMPLETE_TRIANGULATION,
    MESH_CELL_FALLBACK,
)

__all__ = [
    'Severity',
    'ValidationIssue',
    'ValidationResult',
    'REGION_MULTIPLE_ISLANDS',
    'MESH_MALFORMED_POLYGON',
    'MESH_INCOMPLETE_TRIANGULATION',
    'MESH_CELL_FALLBACK',
]
