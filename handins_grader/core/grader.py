"""Core logic for reducing assignment records to a single grade."""

import math
from typing import Sequence

from handins_grader.core.models import AssignmentRecord, GradeSummary
from handins_grader.utils.error_handler import EmptyGradeSetError
from handins_grader.utils.logger import get_logger

logger = get_logger()


def aggregate(records: Sequence[AssignmentRecord]) -> GradeSummary:
    """Computes the weighted percentage grade over graded assignments only.

    Each graded record contributes ``score / max_score * weight``. The sum of
    contributions is divided by the summed weight of the *graded* records, so
    ungraded work neither helps nor hurts the result: it is the grade earned
    on what has been graded so far.

    Args:
        records: Assignment records in server order.

    Returns:
        GradeSummary: The aggregate plus the records, in their original order.

    Raises:
        EmptyGradeSetError: If no graded record carries any weight, leaving
            the aggregate undefined.
    """
    records = list(records)
    graded = [r for r in records if r.graded]
    ungraded = [r for r in records if not r.graded]

    weighted_sum = math.fsum(r.score / r.max_score * r.weight for r in graded)
    graded_weight = math.fsum(r.weight for r in graded)
    ungraded_weight = math.fsum(r.weight for r in ungraded)

    logger.debug(
        f"Aggregating {len(graded)} graded and {len(ungraded)} ungraded records "
        f"(graded weight {graded_weight}, ungraded weight {ungraded_weight})."
    )

    if graded_weight <= 0:
        logger.info("No weighted graded assignments; aggregate grade is undefined.")
        raise EmptyGradeSetError(records)

    return GradeSummary(
        aggregate_percentage=weighted_sum / graded_weight * 100,
        records=records,
        weighted_sum=weighted_sum,
        graded_weight=graded_weight,
        ungraded_weight=ungraded_weight,
    )
