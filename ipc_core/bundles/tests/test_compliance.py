# ipc_core/bundles/tests/test_compliance.py
from datetime import date

import pytest

from ipc_core.bundles.compliance import (
    compliance_score,
    day_number,
    is_admission_shift,
    is_after_discharge,
    percentage,
    round_half_up,
)

ALL_DONE = {
    "skin_prep_2chg": True,
    "dressing_change_daily": True,
    "patency_lumens": True,
    "hub_care_alcohol": True,
    "iv_tubing_change_daily": True,
}


@pytest.mark.parametrize(
    "admission, entry, expected",
    [
        (date(2024, 3, 1), date(2024, 3, 1), 1),
        (date(2024, 3, 1), date(2024, 3, 2), 2),
        (date(2024, 2, 28), date(2024, 3, 1), 3),
    ],
)
def test_day_number(admission, entry, expected):
    assert day_number(admission, entry) == expected


def test_day_one_counts_all_five_components():
    assert compliance_score(ALL_DONE, day=1) == 100
    assert compliance_score({**ALL_DONE, "iv_tubing_change_daily": False}, day=1) == 80
    assert compliance_score({**ALL_DONE, "skin_prep_2chg": False}, day=1) == 80


def test_later_days_ignore_skin_prep():
    assert compliance_score({**ALL_DONE, "skin_prep_2chg": False}, day=2) == 100
    assert compliance_score({"dressing_change_daily": True, "skin_prep_2chg": True}, day=3) == 25
    assert compliance_score({}, day=4) == 0


def test_rounding_is_half_up():
    assert round_half_up(62.5) == 63
    assert round_half_up(2.5) == 3
    assert percentage(2, 3) == 67
    assert percentage(1, 0) == 0


def test_shift_helpers():
    admitted = date(2024, 3, 1)

    assert is_admission_shift(entry_date=admitted, shift="N", admission_date=admitted, admission_shift="N")
    assert not is_admission_shift(entry_date=admitted, shift="M", admission_date=admitted, admission_shift="N")
    assert not is_after_discharge(entry_date=date(2024, 3, 5), discharge_date=None)
    assert is_after_discharge(entry_date=date(2024, 3, 6), discharge_date=date(2024, 3, 5))
    assert not is_after_discharge(entry_date=date(2024, 3, 5), discharge_date=date(2024, 3, 5))
