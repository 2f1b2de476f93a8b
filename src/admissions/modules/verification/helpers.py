"""
Verification Helpers

Batch assignment of a course's applications to its verification officers.
"""

from collections.abc import Sequence
from typing import TypeVar

from admissions.core.errors import ValidationError

A = TypeVar("A")
O = TypeVar("O")


def officer_index(position: int, batch_size: int, officer_count: int) -> int:
    """Officer slot for the application at ``position``: floor(position / batch) mod officers."""
    return (position // batch_size) % officer_count


def plan_batch_assignments(
    applications: Sequence[A],
    officers: Sequence[O],
    batch_size: int,
) -> list[tuple[A, O]]:
    """
    Distribute applications round-robin in fixed-size chunks.

    The first ``batch_size`` applications go to the first officer, the
    next chunk to the second, wrapping around when officers run out.

    Args:
        applications: Applications in their stable (submission) order
        officers: Candidate officers in a stable order
        batch_size: Applications per chunk

    Returns:
        (application, officer) pairs in application order

    Raises:
        ValidationError: If batch_size is not positive or there are no officers
    """
    if batch_size < 1:
        raise ValidationError("Batch size must be a positive integer", fields=["batchSize"])
    if not officers:
        raise ValidationError("No verification officers assigned to this course")

    return [
        (application, officers[officer_index(i, batch_size, len(officers))])
        for i, application in enumerate(applications)
    ]
