# medtrack/models/__init__.py
from .user import User
from .medication_schedule import MedicationSchedule
from .consumption_record import ConsumptionRecord
