"""
Diagnostics attached to region geometry results.

Geometry and mesh operations do not raise on bad input. They return an empty
or partial result and record what went wrong as issues:

    REGION-001  region cells split into more than one 4-connected island
    MESH-001    nothing to mesh (polygon under 3 vertices, or empty region)
    MESH-002    ear clipping stopped before covering the polygon
    MESH-003    perimeter has holes or open chains; per-cell mesh used

Only FAIL issues make a result unusable. WARN marks a degraded but usable
result; INFO is informational.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Iterator, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..regions.data_model import CellCoord

REGION_MULTIPLE_ISLANDS = "REGION-001"
MESH_MALFORMED_POLYGON = "MESH-001"
MESH_INCOMPLETE_TRIANGULATION = "MESH-002"
MESH_CELL_FALLBACK = "MESH-003"


class Severity(Enum):
    """How much an issue degrades the result it is attached to."""
    INFO = auto()
    WARN = auto()
    FAIL = auto()

    def __str__(self) -> str:
        return self.name


# Report order, most severe first
_REPORT_ORDER = (Severity.FAIL, Severity.WARN, Severity.INFO)


@dataclass
class ValidationIssue:
    """One finding about a region or mesh.

    region_id and cell locate the issue when known (an island's centre cell,
    for example); both are optional.
    """
    severity: Severity
    code: str
    message: str
    region_id: Optional[str] = None
    cell: Optional[CellCoord] = None

    def format(self) -> str:
        """[SEVERITY] CODE region=R cell=X,Y :: message"""
        where_region = self.region_id if self.region_id else '-'
        where_cell = '-' if self.cell is None else f"{self.cell.x},{self.cell.y}"
        return f"[{self.severity}] {self.code} region={where_region} cell={where_cell} :: {self.message}"

    def __str__(self) -> str:
        return self.format()


@dataclass
class ValidationResult:
    """Issues gathered by one operation. Passes unless an issue is FAIL."""
    issues: List[ValidationIssue] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.issues)

    def __iter__(self) -> Iterator[ValidationIssue]:
        return iter(self.issues)

    def with_severity(self, severity: Severity) -> List[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity is severity]

    def for_region(self, region_id: str) -> List[ValidationIssue]:
        return [issue for issue in self.issues if issue.region_id == region_id]

    @property
    def failed(self) -> bool:
        return bool(self.with_severity(Severity.FAIL))

    @property
    def passed(self) -> bool:
        return not self.failed

    @property
    def errors(self) -> List[ValidationIssue]:
        return self.with_severity(Severity.FAIL)

    @property
    def warnings(self) -> List[ValidationIssue]:
        return self.with_severity(Severity.WARN)

    @property
    def infos(self) -> List[ValidationIssue]:
        return self.with_severity(Severity.INFO)

    @property
    def codes(self) -> List[str]:
        return [issue.code for issue in self.issues]

    def has_code(self, code: str) -> bool:
        return code in self.codes

    def add_issue(self, issue: ValidationIssue) -> None:
        self.issues.append(issue)

    def merge(self, other: 'ValidationResult') -> 'ValidationResult':
        """Append another result's issues to this one and return self."""
        self.issues += other.issues
        return self

    def counts(self) -> Dict[Severity, int]:
        return {severity: len(self.with_severity(severity)) for severity in _REPORT_ORDER}

    def report(self) -> str:
        """Multi-line summary, most severe issues first."""
        if not self.issues:
            return "No issues"

        counts = self.counts()
        summary = ", ".join(f"{counts[s]} {s}" for s in _REPORT_ORDER if counts[s])
        header = f"{'FAILED' if self.failed else 'OK'} ({summary})"
        body = [issue.format()
                for severity in _REPORT_ORDER
                for issue in self.with_severity(severity)]
        return "\n".join([header] + ["  " + line for line in body])
