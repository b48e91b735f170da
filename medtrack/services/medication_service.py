"""
Medication schedule persistence and the timing-change invalidation glue.

Every function takes the owning ``user_id`` explicitly and commits its own
unit of work. Updates that change a timing field delete the schedule's
consumption records in the same transaction as the new field values.
"""
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from medtrack.errors import ConflictError, NotFoundError, ValidationError
from medtrack.extensions import db
from medtrack.helpers import parse_date, parse_time
from medtrack.models import MedicationSchedule
from medtrack.models.medication_schedule import TIMING_FIELDS
from medtrack.services import consumption_ledger

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ["name", "doseAmount", "startDate", "startTime", "endDate", "intervalHours"]


def _positive_int(data, key, minimum=1):
    value = data.get(key)
    if isinstance(value, bool):
        raise ValidationError(f"'{key}' must be an integer")
    try:
        value = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"'{key}' must be an integer")
    if value < minimum:
        raise ValidationError(f"'{key}' must be at least {minimum}")
    return value


def parse_schedule_payload(data):
    """
    Turn a camelCase JSON body into validated column values.

    Missing fields and rule violations raise ValidationError (422); dates and
    times that cannot be parsed raise MalformedInputError (400).
    """
    data = data or {}
    missing = [f for f in REQUIRED_FIELDS if data.get(f) in (None, "")]
    if missing:
        raise ValidationError(f"Missing fields: {missing}")

    name = str(data["name"]).strip()
    if not name:
        raise ValidationError("'name' cannot be empty")

    values = {
        "name": name,
        "dose_amount": _positive_int(data, "doseAmount"),
        "interval_hours": _positive_int(data, "intervalHours"),
        "start_date": parse_date(data["startDate"], "startDate"),
        "start_time": parse_time(data["startTime"], "startTime"),
        "end_date": parse_date(data["endDate"], "endDate"),
        "color": (data.get("color") or "").strip() or None,
    }
    if values["start_date"] > values["end_date"]:
        raise ValidationError("'startDate' must be on or before 'endDate'")
    return values


# PostgreSQL reports the constraint name, SQLite the column list.
_NAME_TAKEN_MARKERS = (
    "uq_medication_schedule_user_name",
    "medication_schedule.user_id, medication_schedule.name",
)


def _conflict(error, name):
    """Map an IntegrityError to a 409 naming the rule that was broken."""
    detail = str(error.orig)
    if any(marker in detail for marker in _NAME_TAKEN_MARKERS):
        return ConflictError(f"A medication named '{name}' already exists")
    return ConflictError("Medication conflicts with existing data")


def timing_changed(stored, incoming) -> bool:
    """Field-by-field comparison of the timing fields; ``incoming`` is a dict of column values."""
    for field in TIMING_FIELDS:
        old = getattr(stored, field)
        new = incoming.get(field)
        if old != new:
            logger.info("Schedule %s: %s changed %s -> %s", stored.id, field, old, new)
            return True
    return False


def list_schedules(user_id):
    return (
        MedicationSchedule.query
        .filter_by(user_id=user_id)
        .order_by(MedicationSchedule.id)
        .all()
    )


def get_schedule(user_id, schedule_id):
    schedule = MedicationSchedule.query.filter_by(id=schedule_id, user_id=user_id).first()
    if schedule is None:
        raise NotFoundError(f"Medication {schedule_id} not found")
    return schedule


def create_schedule(user_id, data):
    values = parse_schedule_payload(data)
    schedule = MedicationSchedule(user_id=user_id, **values)
    try:
        db.session.add(schedule)
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        raise _conflict(e, values["name"])
    logger.info("Created schedule %s for user %s", schedule.id, user_id)
    return schedule


def update_schedule(user_id, schedule_id, data):
    schedule = get_schedule(user_id, schedule_id)
    values = parse_schedule_payload(data)
    invalidate = timing_changed(schedule, values)

    try:
        for field, value in values.items():
            setattr(schedule, field, value)
        if invalidate:
            consumption_ledger.invalidate_schedule(schedule.id)
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        raise _conflict(e, values["name"])
    except SQLAlchemyError:
        db.session.rollback()
        raise
    return schedule


def delete_schedule(user_id, schedule_id):
    schedule = get_schedule(user_id, schedule_id)
    db.session.delete(schedule)
    db.session.commit()
    logger.info("Deleted schedule %s for user %s", schedule_id, user_id)
