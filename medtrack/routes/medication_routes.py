# medtrack/routes/medication_routes.py
from flask import Blueprint
from medtrack.controllers import medication_controller

medication_bp = Blueprint("medications", __name__, url_prefix="/api/v1/medications")

medication_bp.route("", methods=["GET"])(medication_controller.list_medications)
medication_bp.route("", methods=["POST"])(medication_controller.create_medication)
medication_bp.route("/by-date", methods=["GET"])(medication_controller.medications_by_date)
medication_bp.route("/by-time", methods=["GET"])(medication_controller.medications_by_time)
medication_bp.route("/<int:medication_id>", methods=["GET"])(medication_controller.get_medication)
medication_bp.route("/<int:medication_id>", methods=["PUT"])(medication_controller.update_medication)
medication_bp.route("/<int:medication_id>", methods=["DELETE"])(medication_controller.delete_medication)
