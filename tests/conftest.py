import pytest

from vibepoint.models import User


@pytest.fixture
def user() -> User:
    return User(id="user-1", email="user@example.com")
