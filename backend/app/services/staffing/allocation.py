"""
Allocation accounting for employee-to-project assignments.

An employee's assignments may together claim at most ``MAX_TOTAL_ALLOCATION``
percent of their capacity. Every check re-sums the collection it is given;
callers pass the authoritative set they just read, never a cached total.
Percentages are rounded to ``ALLOCATION_DECIMALS`` places before comparing so
that 33.33 + 33.33 + 33.34 lands on exactly 100.
"""

import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable, Optional

from app.core.config import settings
from app.core.exceptions import ValidationError
from app.services.staffing.records import field_value

logger = logging.getLogger("staffing.allocation")


def _quantum() -> Decimal:
    return Decimal(1).scaleb(-settings.ALLOCATION_DECIMALS)


def _cap() -> Decimal:
    return Decimal(settings.MAX_TOTAL_ALLOCATION)


def round_percentage(value: Any) -> Decimal:
    """Coerce ``value`` to a Decimal rounded half-up to the configured precision."""
    if value is None:
        return Decimal(0).quantize(_quantum())
    try:
        # str() first so floats like 33.33 do not drag binary noise along
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Allocation percentage {value!r} is not a number", field="allocation_percentage")
    if not amount.is_finite():
        raise ValidationError("Allocation percentage must be a finite number", field="allocation_percentage")
    return amount.quantize(_quantum(), rounding=ROUND_HALF_UP)


def _percentage_of(assignment: Any) -> Decimal:
    return round_percentage(field_value(assignment, "allocation_percentage", "allocationPercentage", default=0))


def total_allocation(assignments: Iterable[Any]) -> Decimal:
    """Sum of allocation percentages over ``assignments``."""
    total = sum((_percentage_of(a) for a in assignments), Decimal(0))
    return total.quantize(_quantum())


def remaining_allocation(assignments: Iterable[Any]) -> Decimal:
    """Capacity left before the cap; never negative even for over-allocated data."""
    remaining = _cap() - total_allocation(assignments)
    return max(Decimal(0), remaining).quantize(_quantum())


def validate_new_assignment(candidate_percentage: Any, existing_assignments: Iterable[Any]) -> Decimal:
    """
    Check that adding an assignment at ``candidate_percentage`` keeps the total within the cap.

    Returns:
        The employee's total allocation once the candidate is added.

    Raises:
        ValidationError: if the candidate is not positive or the total would exceed the cap.
    """
    return _validate(round_percentage(candidate_percentage), list(existing_assignments))


def validate_edited_assignment(assignment_id: Any, new_percentage: Any, all_assignments: Iterable[Any]) -> Decimal:
    """
    Same rule as :func:`validate_new_assignment` for an edit in place.

    The assignment being edited is dropped from the sum before ``new_percentage``
    is added, otherwise every edit would count the old share twice.
    """
    others = [a for a in all_assignments if not _same_id(field_value(a, "id"), assignment_id)]
    return _validate(round_percentage(new_percentage), others)


def _validate(candidate: Decimal, others: list) -> Decimal:
    if candidate <= 0:
        raise ValidationError("Allocation percentage must be > 0", field="allocation_percentage")

    new_total = total_allocation(others) + candidate
    if new_total > _cap():
        logger.warning(
            f"Rejected allocation {candidate}%: total would be {new_total}% (cap {settings.MAX_TOTAL_ALLOCATION}%)"
        )
        raise ValidationError(
            f"Total allocation exceeds {settings.MAX_TOTAL_ALLOCATION}%: would be {new_total}%",
            field="allocation_percentage",
        )
    return new_total


def _same_id(left: Optional[Any], right: Optional[Any]) -> bool:
    if left is None or right is None:
        return False
    return str(left) == str(right)
