# medtrack/routes/consumption_routes.py
from flask import Blueprint
from medtrack.controllers import consumption_controller

consumption_bp = Blueprint("consumption", __name__, url_prefix="/api/v1/consumption")

consumption_bp.route("", methods=["POST"])(consumption_controller.record_consumption)
consumption_bp.route("", methods=["GET"])(consumption_controller.consumptions_for_date)
consumption_bp.route("/summary", methods=["GET"])(consumption_controller.daily_summary)
consumption_bp.route("/<int:schedule_id>", methods=["GET"])(consumption_controller.consumption_at)
consumption_bp.route("/records/<int:record_id>", methods=["PATCH"])(consumption_controller.update_record)
consumption_bp.route("/records/<int:record_id>", methods=["DELETE"])(consumption_controller.delete_record)
