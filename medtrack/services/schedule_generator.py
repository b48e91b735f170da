"""
Dose schedule generator.

Projects medication schedules onto a single calendar day. A schedule's first
dose is ``start_date @ start_time`` and every following dose is exactly
``interval_hours`` later, so a day's doses are found by jumping straight to the
first occurrence index that lands on or after midnight and stepping forward
until the day ends.

All datetimes are naive local time. Nothing here touches the database; the
functions accept any object exposing ``start_date``, ``start_time``,
``end_date`` and ``interval_hours`` (``MedicationSchedule`` rows in practice).
"""
import logging
from datetime import datetime, time, timedelta

from medtrack.helpers import format_date, format_time

logger = logging.getLogger(__name__)

DAY_END = time(23, 59, 59)


class DoseOccurrence:
    """One schedule due at one HH:MM on the requested day."""

    def __init__(self, schedule, display_time):
        self.schedule = schedule
        self.display_time = display_time

    @property
    def schedule_id(self):
        return getattr(self.schedule, "id", None)

    def __eq__(self, other):
        if not isinstance(other, DoseOccurrence):
            return NotImplemented
        return self.schedule == other.schedule and self.display_time == other.display_time

    def __repr__(self):
        return f"<DoseOccurrence schedule={self.schedule_id} at {self.display_time}>"

    def to_dict(self):
        data = self.schedule.to_dict() if hasattr(self.schedule, "to_dict") else {"id": self.schedule_id}
        data["displayTime"] = self.display_time
        return data


class DoseGroup:
    def __init__(self, time_key, occurrences=None):
        self.time = time_key
        self.occurrences = occurrences or []

    def __len__(self):
        return len(self.occurrences)

    def to_dict(self):
        return {
            "hour": self.time,
            "medications": [o.to_dict() for o in self.occurrences],
        }


class DoseGroupsByTime:
    def __init__(self, on_date, groups):
        self.date = on_date
        self.groups = groups

    @property
    def total_count(self):
        return sum(len(g) for g in self.groups)

    def times(self):
        return [g.time for g in self.groups]

    def to_dict(self):
        return {
            "date": format_date(self.date),
            "totalMedications": self.total_count,
            "groupsByHour": [g.to_dict() for g in self.groups],
        }


def is_active_on(schedule, on_date) -> bool:
    """
    True when ``on_date`` lies within the schedule's inclusive date range.

    A missing ``start_date`` or ``end_date`` leaves that side open.
    """
    if schedule.start_date is not None and on_date < schedule.start_date:
        return False
    if schedule.end_date is not None and on_date > schedule.end_date:
        return False
    return True


def _time_sort_key(time_key):
    hour, minute = time_key.split(":")
    return int(hour), int(minute)


def dose_datetimes_for_date(schedule, on_date):
    """Every dose instant of ``schedule`` falling on ``on_date``, ascending."""
    if schedule.start_date is None or schedule.start_time is None:
        # no anchor instant to count intervals from
        return []

    interval = timedelta(hours=max(schedule.interval_hours or 1, 1))
    first_dose = datetime.combine(schedule.start_date, schedule.start_time)
    day_start = datetime.combine(on_date, time.min)
    day_end = datetime.combine(on_date, DAY_END)

    index = 0
    if first_dose < day_start:
        # ceil division on timedeltas: first occurrence at or after midnight
        index = -(-(day_start - first_dose) // interval)

    logger.debug(
        "schedule=%s first_dose=%s window=[%s, %s] start_index=%s",
        getattr(schedule, "id", None), first_dose, day_start, day_end, index,
    )

    doses = []
    occurrence = first_dose + index * interval
    while occurrence <= day_end:
        doses.append(occurrence)
        occurrence += interval
    return doses


def dose_times_for_date(schedule, on_date):
    """Zero-padded HH:MM dose times of one schedule on ``on_date``."""
    if not is_active_on(schedule, on_date):
        return []
    times = [format_time(d) for d in dose_datetimes_for_date(schedule, on_date)]
    return sorted(times, key=_time_sort_key)


def occurrences_for_date(schedules, on_date) -> DoseGroupsByTime:
    """
    Group every dose due on ``on_date`` by time of day.

    Returns the groups sorted by (hour, minute). Schedules outside their date
    range contribute nothing, so an empty input yields an empty result.
    """
    buckets = {}
    for schedule in schedules:
        for time_key in dose_times_for_date(schedule, on_date):
            buckets.setdefault(time_key, []).append(DoseOccurrence(schedule, time_key))

    groups = [DoseGroup(k, buckets[k]) for k in sorted(buckets, key=_time_sort_key)]
    result = DoseGroupsByTime(on_date, groups)
    logger.debug("date=%s groups=%s total=%s", on_date, len(groups), result.total_count)
    return result


def occurrences_at_time(schedules, on_date, at_time) -> DoseGroup:
    """The group due at a single time of day; empty when nothing is due then."""
    time_key = at_time if isinstance(at_time, str) else format_time(at_time)
    for group in occurrences_for_date(schedules, on_date).groups:
        if group.time == time_key:
            return group
    return DoseGroup(time_key)
