import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Selects the config environment and pins the in-process adapters so no
    test reaches a real mail provider.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.setdefault("MAIL_TRANSPORT", "fake")
    os.environ.setdefault("USER_STORE", "memory")
    os.environ.setdefault("AUDIT_LOG", "memory")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        # Get the test file path relative to the tests directory
        test_path = Path(item.fspath)

        # Mark tests based on their directory
        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in str(test_path):
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically reset process-wide singletons after every test"""
    yield

    from notifications.audit import reset_audit_log
    from notifications.channel import reset_mail_transport
    from notifications.engine import reset_engine
    from returns.desk import reset_lifecycle
    from returns.store import reset_return_store
    from shared.users import reset_user_store

    reset_engine()
    reset_lifecycle()
    reset_return_store()
    reset_mail_transport()
    reset_audit_log()
    reset_user_store()
