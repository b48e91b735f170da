from datetime import date, time

import pytest
from flask_jwt_extended import create_access_token

from medtrack import create_app
from medtrack.extensions import db
from medtrack.models import MedicationSchedule, User


@pytest.fixture
def app():
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "JWT_SECRET_KEY": "test-secret-key-that-is-long-enough-for-hs256",
        "LOG_LEVEL": "DEBUG",
    })
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def user(app):
    u = User(email="patient@example.com", first_name="Ana", last_name="Lopez")
    db.session.add(u)
    db.session.commit()
    return u


@pytest.fixture
def other_user(app):
    u = User(email="someone.else@example.com")
    db.session.add(u)
    db.session.commit()
    return u


@pytest.fixture
def make_schedule(app):
    def _make(owner, **overrides):
        fields = dict(
            name="Amoxicillin",
            dose_amount=500,
            start_date=date(2026, 2, 2),
            start_time=time(19, 0),
            end_date=date(2026, 2, 10),
            interval_hours=6,
        )
        fields.update(overrides)
        schedule = MedicationSchedule(user_id=owner.id, **fields)
        db.session.add(schedule)
        db.session.commit()
        return schedule
    return _make


@pytest.fixture
def auth_headers(app):
    def _headers(owner):
        token = create_access_token(identity=str(owner.id))
        return {"Authorization": f"Bearer {token}"}
    return _headers
