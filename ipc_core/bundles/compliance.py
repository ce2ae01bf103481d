# ipc_core/bundles/compliance.py
"""
Day / shift arithmetic for CLABSI bundle entries.

Day 1 is the admission date. On day 1 all five bundle components count
(denominator 5); from day 2 the admission-only skin prep drops out
(denominator 4). Scores are whole percentages, halves rounded up.
"""
from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ipc_core.bundles.constants import ADMISSION_COMPONENT, DAILY_COMPONENTS


def round_half_up(value) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def percentage(completed: int, total: int) -> int:
    if total <= 0:
        return 0
    return round_half_up(Decimal(100 * completed) / Decimal(total))


def day_number(admission_date: date, entry_date: date) -> int:
    return abs((entry_date - admission_date).days) + 1


def compliance_score(components: Mapping[str, bool], *, day: int) -> int:
    first_day = day == 1
    denominator = 5 if first_day else 4

    completed = sum(1 for name in DAILY_COMPONENTS if components.get(name))
    if first_day and components.get(ADMISSION_COMPONENT):
        completed += 1

    return percentage(completed, denominator)


def is_admission_shift(*, entry_date: date, shift: str, admission_date: date, admission_shift: str) -> bool:
    return entry_date == admission_date and shift == admission_shift


def is_after_discharge(*, entry_date: date, discharge_date: Optional[date]) -> bool:
    return discharge_date is not None and entry_date > discharge_date
