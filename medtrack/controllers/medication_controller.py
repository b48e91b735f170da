# medtrack/controllers/medication_controller.py
from flask import current_app, request
from flask_jwt_extended import jwt_required

from medtrack.controllers.identity import current_user_id
from medtrack.helpers import api_response, parse_date, parse_time
from medtrack.services import medication_service, schedule_generator


@jwt_required()
def list_medications():
    user_id = current_user_id()
    schedules = medication_service.list_schedules(user_id)
    return api_response(True, "Medications retrieved", [s.to_dict() for s in schedules])


@jwt_required()
def create_medication():
    user_id = current_user_id()
    schedule = medication_service.create_schedule(user_id, request.get_json(silent=True))
    return api_response(True, "Medication created", schedule.to_dict(), 201)


@jwt_required()
def get_medication(medication_id):
    user_id = current_user_id()
    schedule = medication_service.get_schedule(user_id, medication_id)
    return api_response(True, "Medication retrieved", schedule.to_dict())


@jwt_required()
def update_medication(medication_id):
    user_id = current_user_id()
    schedule = medication_service.update_schedule(user_id, medication_id, request.get_json(silent=True))
    current_app.logger.info(f"Medication {medication_id} updated by user {user_id}")
    return api_response(True, "Medication updated", schedule.to_dict())


@jwt_required()
def delete_medication(medication_id):
    user_id = current_user_id()
    medication_service.delete_schedule(user_id, medication_id)
    return api_response(True, "Medication deleted")


@jwt_required()
def medications_by_date():
    """Doses due on ?date=YYYY-MM-DD, grouped by HH:MM."""
    user_id = current_user_id()
    on_date = parse_date(request.args.get("date"))
    schedules = medication_service.list_schedules(user_id)
    result = schedule_generator.occurrences_for_date(schedules, on_date)
    return api_response(True, "Medications for date", result.to_dict())


@jwt_required()
def medications_by_time():
    user_id = current_user_id()
    on_date = parse_date(request.args.get("date"))
    at_time = parse_time(request.args.get("time"))
    schedules = medication_service.list_schedules(user_id)
    group = schedule_generator.occurrences_at_time(schedules, on_date, at_time)
    return api_response(True, "Medications for time", group.to_dict())
