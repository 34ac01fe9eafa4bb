"""
Pydantic data models for matcher results.

Path maps themselves stay plain dicts of point lists; these models describe
what the matcher hands back. Content-based IDs keep outputs deterministic.
"""

import hashlib
from enum import Enum
from typing import Any, Dict, List, Set

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MatchStrategy(str, Enum):
    """Which triple finder produced a wedge."""
    MUTUAL_NEAREST = "mutual_nearest"
    DISTANCE_RESCAN = "distance_rescan"


class Severity(str, Enum):
    """Severity levels for validation checks."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"


class Wedge(BaseModel):
    """Three oriented curves welded into one closed contour."""
    wedge_id: str
    path_ids: List[Any] = Field(..., min_length=3, max_length=3)
    curves: List[List[List[float]]] = Field(..., min_length=3, max_length=3)
    strategy: MatchStrategy = MatchStrategy.MUTUAL_NEAREST

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("curves")
    @classmethod
    def _curves_have_endpoints(cls, curves):
        for curve in curves:
            if len(curve) < 2:
                raise ValueError("wedge curve needs at least a start and an end point")
        return curves


class MatchResult(BaseModel):
    """Wedges found in a curve map and the identifiers they consumed."""
    wedges: List[Wedge] = Field(default_factory=list)
    consumed: Set[Any] = Field(default_factory=set)
    max_dist: float = 0.0
    passes: int = 0

    model_config = ConfigDict(extra="forbid")


class CheckResult(BaseModel):
    """Result of a single validation check."""
    rule_id: str
    severity: Severity
    passed: bool
    message: str
    evidence: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


class ValidationReport(BaseModel):
    """Collection of validation check results."""
    checks: List[CheckResult] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @property
    def has_errors(self):
        """Check if any errors exist."""
        return self.error_count > 0

    @property
    def error_count(self):
        """Count of failed error-level checks."""
        return sum(1 for c in self.checks if c.severity == Severity.ERROR and not c.passed)

    @property
    def warning_count(self):
        """Count of failed warning-level checks."""
        return sum(1 for c in self.checks if c.severity == Severity.WARN and not c.passed)


class PipelineResult(BaseModel):
    """Everything a full run produces for one path map."""
    curve_ids: List[Any] = Field(default_factory=list)
    line_ids: List[Any] = Field(default_factory=list)
    lines: Dict[Any, List[List[float]]] = Field(default_factory=dict)
    match: MatchResult = Field(default_factory=MatchResult)
    unmatched: List[Any] = Field(default_factory=list)
    validation: ValidationReport = Field(default_factory=ValidationReport)

    model_config = ConfigDict(extra="forbid")


def generate_wedge_id(path_ids):
    """
    Generate deterministic wedge ID from the member path identifiers.

    Identifiers are compared as strings so mixed id types still sort.
    """
    data = ":".join(sorted(str(p) for p in path_ids))
    h = hashlib.sha256(data.encode()).hexdigest()[:12]
    return f"wedge_{h}"
