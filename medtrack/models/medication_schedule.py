from medtrack.extensions import db
from medtrack.helpers import format_date, format_time
from sqlalchemy.sql import func

# Fields whose change invalidates previously recorded consumption keys.
TIMING_FIELDS = ("interval_hours", "start_time", "start_date", "end_date")


class MedicationSchedule(db.Model):
    __tablename__ = "medication_schedule"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    name = db.Column(db.String(120), nullable=False)
    dose_amount = db.Column(db.Integer, nullable=False)   # e.g. 500 (mg), opaque to scheduling
    color = db.Column(db.String(20), nullable=True)       # e.g. "#3498db"

    start_date = db.Column(db.Date, nullable=False)
    start_time = db.Column(db.Time(timezone=False), nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    interval_hours = db.Column(db.Integer, nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = db.relationship("User", back_populates="medication_schedules")
    consumption_records = db.relationship(
        "ConsumptionRecord", back_populates="schedule", cascade="all,delete"
    )

    __table_args__ = (
        db.UniqueConstraint("user_id", "name", name="uq_medication_schedule_user_name"),
        db.CheckConstraint("interval_hours >= 1", name="ck_medication_schedule_interval"),
        db.CheckConstraint("start_date <= end_date", name="ck_medication_schedule_dates"),
    )

    # Two schedules with the same primary key are interchangeable.
    def __eq__(self, other):
        if not isinstance(other, MedicationSchedule):
            return NotImplemented
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self):
        if self.id is None:
            return id(self)
        return hash((MedicationSchedule, self.id))

    def __repr__(self):
        return f"<MedicationSchedule id={self.id} name={self.name!r} every {self.interval_hours}h>"

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "doseAmount": self.dose_amount,
            "color": self.color,
            "startDate": format_date(self.start_date) if self.start_date else None,
            "startTime": format_time(self.start_time) if self.start_time else None,
            "endDate": format_date(self.end_date) if self.end_date else None,
            "intervalHours": self.interval_hours,
        }
