"""Pytest configuration and fixtures for the import API tests."""

import io

import pytest

from app import create_app
from config import TestingConfig
from extensions import db
from models import User, Student, YearGroup, Subject, Department


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no database or app)")
    config.addinivalue_line("markers", "integration: Integration tests (app context and database)")


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_user(app):
    user = User(email="admin@school.test", full_name="Site Admin", role="admin")
    user.set_password("admin-pass")
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def teacher_user(app):
    department = Department(name="Mathematics")
    db.session.add(department)
    db.session.flush()
    user = User(email="ava.patel@school.test", full_name="Ava Patel", role="teacher",
                department_id=department.id)
    user.set_password("teacher-pass")
    db.session.add(user)
    db.session.commit()
    return user


def _login(client, user):
    with client.session_transaction() as sess:
        sess["_user_id"] = str(user.id)
        sess["_fresh"] = True
    return client


@pytest.fixture
def admin_client(client, admin_user):
    return _login(client, admin_user)


@pytest.fixture
def teacher_client(client, teacher_user):
    return _login(client, teacher_user)


@pytest.fixture
def reference_data(app, teacher_user):
    """Year groups, subjects and students that schedule imports resolve against."""
    year_groups = [YearGroup(name=f"Y{n}") for n in (9, 10, 11)]
    subjects = [Subject(name=name) for name in ("Mathematics", "Physics", "Dramatic Arts")]
    db.session.add_all(year_groups + subjects)
    db.session.flush()
    students = [
        Student(full_name="Liam Chen", year_group_id=year_groups[1].id, school_year_group="Year 10"),
        Student(full_name="Noor Haddad", year_group_id=year_groups[1].id, school_year_group="Year 10"),
        Student(full_name="Omar Farouk", year_group_id=year_groups[2].id, school_year_group="Year 11"),
    ]
    db.session.add_all(students)
    db.session.commit()
    return {
        "teacher": teacher_user,
        "year_groups": {yg.name: yg for yg in year_groups},
        "subjects": {s.name: s for s in subjects},
        "students": {s.full_name: s for s in students},
    }


def csv_upload(text, filename="import.csv"):
    """Form data for posting ``text`` as the ``file`` field."""
    return {"file": (io.BytesIO(text.encode("utf-8")), filename)}
