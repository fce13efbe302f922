"""Shared fixtures: a Flask app on an in-memory audit log and a fixed clock."""
import pytest

from backend.intake import create_app
from backend.intake.audit_log import InMemoryAuditLogStore
from backend.intake.config import TestingConfig
from tests.factories import fixed_clock


@pytest.fixture
def audit_log():
    return InMemoryAuditLogStore()


@pytest.fixture
def app(audit_log):
    return create_app(TestingConfig, audit_log=audit_log, clock=fixed_clock)


@pytest.fixture
def client(app):
    return app.test_client()
