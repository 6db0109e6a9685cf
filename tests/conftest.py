from __future__ import annotations

from dataclasses import dataclass

import pytest
from werkzeug.security import generate_password_hash

from dayflow.core.enums import Role
from dayflow.main import create_app


@dataclass(frozen=True)
class Seeded:
    admin: int
    hr: int
    alice: int
    bob: int


PASSWORD = "secret123"


@pytest.fixture
def app(tmp_path):
    app = create_app(
        {
            "TESTING": True,
            "DEBUG": False,
            "SECRET_KEY": "test-secret",
            "DATABASE_PATH": str(tmp_path / "dayflow.db"),
            "AUTO_INIT_DB": True,
            "AUTO_SEED_DB": False,
            "LOG_LEVEL": "WARNING",
        }
    )
    return app


@pytest.fixture
def container(app):
    return app.extensions["dayflow"]


@pytest.fixture
def users(container) -> Seeded:
    repo = container.users_repo
    password_hash = generate_password_hash(PASSWORD, method="pbkdf2:sha256:1000")

    def make(employee_id, username, role, first, last, **profile):
        return repo.create_user(
            employee_id=employee_id,
            username=username,
            email=f"{username}@example.com",
            password_hash=password_hash,
            role=role,
            profile={"first_name": first, "last_name": last, **profile},
        )

    return Seeded(
        admin=make("EMP001", "admin", Role.ADMIN, "Ada", "Admin"),
        hr=make("EMP002", "hr", Role.HR, "Harper", "Reyes", department="Human Resources"),
        alice=make("EMP003", "alice", Role.EMPLOYEE, "Alice", "Ng", job_title="Developer", department="Engineering", salary=4000),
        bob=make("EMP004", "bob", Role.EMPLOYEE, "Bob", "Stone", job_title="Designer"),
    )


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    """Put a user into the test client's session without a password round-trip."""

    def _login(user_id: int, role: Role):
        with client.session_transaction() as sess:
            sess["user_id"] = int(user_id)
            sess["role"] = Role(role).value
        return client

    return _login
