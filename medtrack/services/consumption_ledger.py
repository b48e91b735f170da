"""
Consumption ledger: one boolean per (user, schedule, date, time).

Rows are created lazily the first time a client reports a dose and updated in
place afterwards. The unique key on ``consumption_record`` is the only
concurrency control; an insert that loses a race against an identical insert
is retried as an update.
"""
import logging

from sqlalchemy.exc import IntegrityError

from medtrack.errors import NotFoundError
from medtrack.extensions import db
from medtrack.helpers import format_time
from medtrack.models import ConsumptionRecord, MedicationSchedule
from medtrack.services import schedule_generator

logger = logging.getLogger(__name__)


def _get_owned_schedule(user_id, schedule_id):
    schedule = MedicationSchedule.query.filter_by(id=schedule_id, user_id=user_id).first()
    if schedule is None:
        raise NotFoundError(f"Medication {schedule_id} not found")
    return schedule


def _find_record(user_id, schedule_id, on_date, at_time):
    return ConsumptionRecord.query.filter_by(
        user_id=user_id, schedule_id=schedule_id, date=on_date, time=at_time
    ).first()


def _get_owned_record(user_id, record_id):
    record = ConsumptionRecord.query.filter_by(id=record_id, user_id=user_id).first()
    if record is None:
        raise NotFoundError(f"Consumption record {record_id} not found")
    return record


def record_consumption(user_id, schedule_id, on_date, at_time, consumed):
    """
    Upsert the consumed flag for one dose occurrence and commit.

    ``at_time`` is not checked against the generated schedule; any time key
    is accepted.
    """
    _get_owned_schedule(user_id, schedule_id)
    consumed = bool(consumed)

    record = _find_record(user_id, schedule_id, on_date, at_time)
    if record is not None:
        record.consumed = consumed
        db.session.commit()
        logger.info("Updated consumption record %s (consumed=%s)", record.id, consumed)
        return record

    record = ConsumptionRecord(
        user_id=user_id, schedule_id=schedule_id, date=on_date, time=at_time, consumed=consumed
    )
    try:
        db.session.add(record)
        db.session.commit()
        logger.info(
            "Created consumption record %s for schedule %s on %s %s", record.id, schedule_id, on_date, at_time
        )
        return record
    except IntegrityError:
        # Another request inserted the same key between lookup and insert.
        db.session.rollback()
        record = _find_record(user_id, schedule_id, on_date, at_time)
        if record is None:
            raise

    record.consumed = consumed
    db.session.commit()
    logger.info("Retried duplicate insert as update of record %s", record.id)
    return record


def consumptions_for_date(user_id, on_date):
    return ConsumptionRecord.query.filter_by(user_id=user_id, date=on_date).all()


def consumption_at(user_id, schedule_id, on_date, at_time):
    """Return the record for the key, or None when nothing was reported yet."""
    _get_owned_schedule(user_id, schedule_id)
    return _find_record(user_id, schedule_id, on_date, at_time)


def consumptions_for_schedule(user_id, schedule_id, start_date, end_date):
    _get_owned_schedule(user_id, schedule_id)
    return (
        ConsumptionRecord.query
        .filter(
            ConsumptionRecord.user_id == user_id,
            ConsumptionRecord.schedule_id == schedule_id,
            ConsumptionRecord.date.between(start_date, end_date),
        )
        .order_by(ConsumptionRecord.date, ConsumptionRecord.time)
        .all()
    )


def count_consumed(user_id, on_date) -> int:
    return ConsumptionRecord.query.filter_by(user_id=user_id, date=on_date, consumed=True).count()


def set_consumed(user_id, record_id, consumed):
    record = _get_owned_record(user_id, record_id)
    record.consumed = bool(consumed)
    db.session.commit()
    return record


def delete_consumption(user_id, record_id):
    record = _get_owned_record(user_id, record_id)
    db.session.delete(record)
    db.session.commit()


def invalidate_schedule(schedule_id) -> int:
    """
    Delete every ledger row of a schedule inside the current transaction.

    The caller commits, so the deletion lands together with whatever schedule
    change triggered it.
    """
    deleted = (
        ConsumptionRecord.query
        .filter_by(schedule_id=schedule_id)
        .delete(synchronize_session=False)
    )
    logger.info("Invalidated %s consumption records for schedule %s", deleted, schedule_id)
    return deleted


def daily_summary(user_id, schedules, on_date):
    """Join the day's generated doses with the ledger rows for that day."""
    planned = schedule_generator.occurrences_for_date(schedules, on_date)
    records = {
        (r.schedule_id, format_time(r.time)): r
        for r in consumptions_for_date(user_id, on_date)
    }

    consumed = 0
    for group in planned.groups:
        for occurrence in group.occurrences:
            record = records.get((occurrence.schedule_id, group.time))
            if record is not None and record.consumed:
                consumed += 1

    return {
        "date": on_date.isoformat(),
        "scheduled": planned.total_count,
        "consumed": consumed,
        "pending": planned.total_count - consumed,
    }
