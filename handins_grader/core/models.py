"""Value types shared by the handins client and the grade aggregator."""

import math
from dataclasses import dataclass, field
from typing import List, Optional

from handins_grader import config


@dataclass(frozen=True)
class AssignmentRecord:
    """One assignment row as reported by the handins server.

    A ``score`` of ``None`` means the assignment has not been graded yet. The
    weight is known regardless of grading state.
    """
    name: str
    score: Optional[float]
    max_score: float
    weight: float
    assignment_id: Optional[int] = None

    def __post_init__(self):
        for label, value in (("weight", self.weight), ("score", self.score), ("max score", self.max_score)):
            if value is not None and not math.isfinite(value):
                raise ValueError(f"Assignment '{self.name}' has a non-finite {label}: {value}")
        if self.weight < 0:
            raise ValueError(f"Assignment '{self.name}' has a negative weight: {self.weight}")
        if self.score is not None and self.max_score <= 0:
            raise ValueError(f"Assignment '{self.name}' has a non-positive max score: {self.max_score}")

    @property
    def graded(self) -> bool:
        return self.score is not None

    @property
    def percentage(self) -> Optional[float]:
        """Score normalized to a 0-100 scale, or None when ungraded."""
        if self.score is None:
            return None
        return self.score / self.max_score * 100

    def submission_url(self, course_id: int) -> Optional[str]:
        """URL of the page for submitting this assignment, if its id is known."""
        if self.assignment_id is None:
            return None
        path = config.SUBMISSION_PATH.format(course_id=course_id, assignment_id=self.assignment_id)
        return f"{config.BASE_URL}{path}"


@dataclass(frozen=True)
class GradeSummary:
    """Result of aggregating a list of assignment records.

    All values are unrounded; rounding is left to the display layer.
    """
    aggregate_percentage: float
    records: List[AssignmentRecord] = field(default_factory=list)
    weighted_sum: float = 0.0
    graded_weight: float = 0.0
    ungraded_weight: float = 0.0

    @property
    def graded_records(self) -> List[AssignmentRecord]:
        return [r for r in self.records if r.graded]

    @property
    def ungraded_records(self) -> List[AssignmentRecord]:
        return [r for r in self.records if not r.graded]

    @property
    def total_weight(self) -> float:
        return self.graded_weight + self.ungraded_weight

    @property
    def minimum_percentage(self) -> float:
        """Final grade if every ungraded assignment earns zero."""
        return self.weighted_sum / self.total_weight * 100

    @property
    def maximum_percentage(self) -> float:
        """Final grade if every ungraded assignment earns full marks."""
        return (self.weighted_sum + self.ungraded_weight) / self.total_weight * 100

    @property
    def ungraded_points(self) -> float:
        """How far the aggregate can still rise through ungraded work."""
        return self.maximum_percentage - self.aggregate_percentage
