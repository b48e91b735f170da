# medtrack/controllers/consumption_controller.py
from flask import request
from flask_jwt_extended import jwt_required

from medtrack.controllers.identity import current_user_id
from medtrack.errors import ValidationError
from medtrack.helpers import api_response, parse_date, parse_time
from medtrack.services import consumption_ledger, medication_service


def _schedule_id(data):
    value = data.get("scheduleId")
    if isinstance(value, bool) or not isinstance(value, (int, str)) or not str(value).isdigit():
        raise ValidationError("'scheduleId' must be an integer")
    return int(value)


def _consumed_flag(data):
    consumed = data.get("consumed")
    if not isinstance(consumed, bool):
        raise ValidationError("'consumed' must be true or false")
    return consumed


@jwt_required()
def record_consumption():
    """
    Body: { "scheduleId": 5, "date": "2026-02-03", "time": "07:00", "consumed": true }
    """
    user_id = current_user_id()
    data = request.get_json(silent=True) or {}

    missing = [f for f in ("scheduleId", "date", "time", "consumed") if f not in data]
    if missing:
        raise ValidationError(f"Missing fields: {missing}")

    record = consumption_ledger.record_consumption(
        user_id,
        _schedule_id(data),
        parse_date(data["date"]),
        parse_time(data["time"]),
        _consumed_flag(data),
    )
    return api_response(True, "Consumption recorded", record.to_dict())


@jwt_required()
def consumptions_for_date():
    user_id = current_user_id()
    on_date = parse_date(request.args.get("date"))
    records = consumption_ledger.consumptions_for_date(user_id, on_date)
    return api_response(True, "Consumptions for date", [r.to_dict() for r in records])


@jwt_required()
def consumption_at(schedule_id):
    """``data`` is null when no record exists for the key yet."""
    user_id = current_user_id()
    on_date = parse_date(request.args.get("date"))
    at_time = parse_time(request.args.get("time"))
    record = consumption_ledger.consumption_at(user_id, schedule_id, on_date, at_time)
    if record is None:
        return api_response(True, "No consumption recorded", None)
    return api_response(True, "Consumption found", record.to_dict())


@jwt_required()
def daily_summary():
    user_id = current_user_id()
    on_date = parse_date(request.args.get("date"))
    schedules = medication_service.list_schedules(user_id)
    summary = consumption_ledger.daily_summary(user_id, schedules, on_date)
    return api_response(True, "Daily summary", summary)


@jwt_required()
def update_record(record_id):
    user_id = current_user_id()
    data = request.get_json(silent=True) or {}
    record = consumption_ledger.set_consumed(user_id, record_id, _consumed_flag(data))
    return api_response(True, "Consumption updated", record.to_dict())


@jwt_required()
def delete_record(record_id):
    user_id = current_user_id()
    consumption_ledger.delete_consumption(user_id, record_id)
    return api_response(True, "Consumption deleted")
