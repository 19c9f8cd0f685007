import pytest

from tripsettle.app import create_app
from tripsettle.models import Member


@pytest.fixture
def app():
    return create_app({'TESTING': True})


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def trio():
    return [Member('m1', 'Alice'), Member('m2', 'Bob'), Member('m3', 'Carol')]
