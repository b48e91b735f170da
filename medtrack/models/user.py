from medtrack.extensions import db
from sqlalchemy.sql import func


class User(db.Model):
    """
    Minimal account row that owns schedules and ledger entries.
    Registration, credentials and token issuance live outside this service.
    """
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    email = db.Column(db.String(255), unique=True, index=True, nullable=False)
    first_name = db.Column(db.String(80), nullable=True)
    last_name = db.Column(db.String(80), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), server_default=func.now(), nullable=False)

    medication_schedules = db.relationship(
        "MedicationSchedule", back_populates="user", cascade="all,delete"
    )
    consumption_records = db.relationship(
        "ConsumptionRecord", back_populates="user", cascade="all,delete"
    )
