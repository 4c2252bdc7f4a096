"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities, see tests/__init__.py
"""

import pytest

from tests import DataFactory, create_test_engine, create_test_session_factory, drop_test_database


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring database (deselect with '-m \"not db\"')"
    )


@pytest.fixture
def session_factory():
    """Fresh database per test, yielded as a sessionmaker."""
    engine = create_test_engine()
    try:
        yield create_test_session_factory(engine)
    finally:
        drop_test_database(engine)


@pytest.fixture
def session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def factory(session):
    return DataFactory(session)
