"""Pytest configuration and fixtures."""

import pytest
import tempfile
from pathlib import Path

from json_processor import JSONProcessor

from sample_models import make_user, user_json


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def processor():
    """Processor with its own lock registry."""
    return JSONProcessor()


@pytest.fixture
def sample_user():
    """Fully populated User instance."""
    return make_user()


@pytest.fixture
def sample_user_json():
    """Tree content produced by serializing sample_user."""
    return user_json()


@pytest.fixture
def sample_users_json():
    """Array of user documents for bulk tests."""
    return [user_json("Alice"), user_json("Bob"), user_json("Carol")]
