from medtrack.extensions import db
from medtrack.helpers import format_date, format_time
from sqlalchemy.sql import func


class ConsumptionRecord(db.Model):
    """Whether one dose occurrence (user, schedule, date, time) was taken."""
    __tablename__ = "consumption_record"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    schedule_id = db.Column(
        db.Integer, db.ForeignKey("medication_schedule.id", ondelete="CASCADE"), nullable=False, index=True
    )

    date = db.Column(db.Date, nullable=False)
    time = db.Column(db.Time(timezone=False), nullable=False)
    consumed = db.Column(db.Boolean, nullable=False, default=False)

    # set on insert only
    created_at = db.Column(db.DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = db.relationship("User", back_populates="consumption_records")
    schedule = db.relationship("MedicationSchedule", back_populates="consumption_records")

    __table_args__ = (
        db.UniqueConstraint("user_id", "schedule_id", "date", "time", name="uq_consumption_record_key"),
        db.Index("ix_consumption_record_user_date", "user_id", "date"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "date": format_date(self.date),
            "time": format_time(self.time),
            "scheduleId": self.schedule_id,
            "scheduleName": self.schedule.name if self.schedule is not None else None,
            "consumed": self.consumed,
        }
