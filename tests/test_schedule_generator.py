from datetime import date, datetime, time, timedelta

import pytest

from medtrack.models import MedicationSchedule
from medtrack.services.schedule_generator import (
    dose_datetimes_for_date,
    dose_times_for_date,
    is_active_on,
    occurrences_at_time,
    occurrences_for_date,
)


def schedule(id=1, name="Amoxicillin", start=date(2026, 2, 2), at=time(19, 0),
             end=date(2026, 2, 10), every=6):
    return MedicationSchedule(
        id=id, name=name, dose_amount=500,
        start_date=start, start_time=at, end_date=end, interval_hours=every,
    )


def test_day_after_start_wraps_from_previous_evening():
    result = occurrences_for_date([schedule()], date(2026, 2, 3))
    assert result.times() == ["01:00", "07:00", "13:00", "19:00"]
    assert result.total_count == 4


def test_start_date_only_has_doses_from_start_time():
    result = occurrences_for_date([schedule()], date(2026, 2, 2))
    assert result.times() == ["19:00"]


def test_hourly_schedule_stops_at_end_of_start_day():
    s = schedule(at=time(18, 0), every=1)
    assert dose_times_for_date(s, date(2026, 2, 2)) == ["18:00", "19:00", "20:00", "21:00", "22:00", "23:00"]


def test_date_after_end_date_is_empty():
    result = occurrences_for_date([schedule()], date(2026, 2, 11))
    assert result.groups == []
    assert result.to_dict()["totalMedications"] == 0


def test_date_before_start_date_is_empty():
    assert occurrences_for_date([schedule()], date(2026, 2, 1)).total_count == 0


def test_end_date_is_inclusive():
    assert dose_times_for_date(schedule(), date(2026, 2, 10)) == ["01:00", "07:00", "13:00", "19:00"]


def test_midnight_dose_belongs_to_the_new_day():
    s = schedule(at=time(16, 0), every=8)
    assert dose_times_for_date(s, date(2026, 2, 2)) == ["16:00"]
    assert dose_times_for_date(s, date(2026, 2, 3)) == ["00:00", "08:00", "16:00"]


def test_minutes_are_kept_across_midnight():
    s = schedule(at=time(19, 30), every=1)
    times = dose_times_for_date(s, date(2026, 2, 3))
    assert times[0] == "00:30"
    assert times[-1] == "23:30"
    assert len(times) == 24


def test_interval_longer_than_a_day_skips_days():
    s = schedule(at=time(8, 0), every=36)
    assert dose_times_for_date(s, date(2026, 2, 3)) == ["20:00"]
    assert dose_times_for_date(s, date(2026, 2, 4)) == []
    assert dose_times_for_date(s, date(2026, 2, 5)) == ["08:00"]


@pytest.mark.parametrize("every", [1, 2, 3, 4, 6, 8, 12, 24])
def test_interior_day_count_and_spacing(every):
    s = schedule(start=date(2026, 2, 1), at=time(7, 30), end=date(2026, 2, 20), every=every)
    doses = dose_datetimes_for_date(s, date(2026, 2, 5))

    assert len(doses) == 24 // every
    assert all(d.date() == date(2026, 2, 5) for d in doses)
    for earlier, later in zip(doses, doses[1:]):
        assert later - earlier == timedelta(hours=every)


@pytest.mark.parametrize("every", [5, 7, 9, 10])
def test_non_divisor_intervals_stay_inside_the_day(every):
    s = schedule(start=date(2026, 2, 1), at=time(19, 0), end=date(2026, 2, 20), every=every)
    for day in range(2, 8):
        on_date = date(2026, 2, day)
        doses = dose_datetimes_for_date(s, on_date)
        assert len(doses) in (24 // every, 24 // every + 1)
        assert doses[0] - datetime.combine(on_date, time.min) < timedelta(hours=every)
        assert all(d.date() == on_date for d in doses)


def test_groups_across_schedules_sort_numerically():
    morning = schedule(id=1, name="Vitamin D", at=time(9, 5), every=24)
    late = schedule(id=2, name="Ibuprofen", at=time(10, 0), every=24)
    paired = schedule(id=3, name="Omeprazole", at=time(10, 0), every=12)

    result = occurrences_for_date([late, paired, morning], date(2026, 2, 4))

    assert result.times() == ["09:05", "10:00", "22:00"]
    ten = result.groups[1]
    assert [o.schedule.name for o in ten.occurrences] == ["Ibuprofen", "Omeprazole"]
    assert result.total_count == 4


def test_generation_is_idempotent():
    schedules = [schedule(id=1), schedule(id=2, name="Metformin", at=time(8, 15), every=8)]
    first = occurrences_for_date(schedules, date(2026, 2, 4)).to_dict()
    second = occurrences_for_date(schedules, date(2026, 2, 4)).to_dict()
    assert first == second


def test_empty_schedule_list():
    result = occurrences_for_date([], date(2026, 2, 4))
    assert result.groups == []
    assert result.total_count == 0


def test_open_end_date_is_unbounded():
    s = schedule(end=None)
    assert is_active_on(s, date(2030, 1, 1))
    assert dose_times_for_date(s, date(2030, 1, 1)) == ["01:00", "07:00", "13:00", "19:00"]


def test_missing_start_has_no_anchor():
    s = schedule(start=None)
    assert is_active_on(s, date(2026, 2, 4))
    assert dose_times_for_date(s, date(2026, 2, 4)) == []


def test_to_dict_shape():
    payload = occurrences_for_date([schedule()], date(2026, 2, 2)).to_dict()
    assert payload["date"] == "2026-02-02"
    assert payload["totalMedications"] == 1
    group = payload["groupsByHour"][0]
    assert group["hour"] == "19:00"
    med = group["medications"][0]
    assert med["id"] == 1
    assert med["name"] == "Amoxicillin"
    assert med["displayTime"] == "19:00"
    assert med["intervalHours"] == 6


def test_occurrences_at_time():
    s1 = schedule(id=1)
    s2 = schedule(id=2, name="Metformin", at=time(7, 0), every=12)
    group = occurrences_at_time([s1, s2], date(2026, 2, 3), time(7, 0))
    assert group.time == "07:00"
    assert {o.schedule_id for o in group.occurrences} == {1, 2}

    empty = occurrences_at_time([s1, s2], date(2026, 2, 3), time(8, 0))
    assert empty.to_dict() == {"hour": "08:00", "medications": []}


def test_schedules_compare_by_primary_key():
    a = schedule(id=7, name="Old name")
    b = schedule(id=7, name="New name", every=12)
    assert a == b
    assert len({a, b}) == 1
    assert schedule(id=None) != schedule(id=None)


@pytest.mark.parametrize("every", [0, -6, None])
def test_non_positive_interval_falls_back_to_hourly(every):
    s = schedule(start=date(2026, 2, 3), at=time(1, 0), every=every)
    times = dose_times_for_date(s, date(2026, 2, 3))
    assert times[0] == "01:00"
    assert times[-1] == "23:00"
    assert len(times) == 23
