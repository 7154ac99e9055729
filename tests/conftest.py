"""Test configuration and fixtures for berryargs."""

from dotenv import load_dotenv
import pytest

from tests.schema import Query

# Try to load environment variables from .env file
load_dotenv()


@pytest.fixture
def field_def():
    """The Query.field definition; descriptions are restored after each test."""
    fdef = Query.__berry_fields__['field']
    saved = {name: fdef.arguments[name].description for name in fdef.arguments}
    yield fdef
    for name, description in saved.items():
        fdef.arguments[name].description = description


@pytest.fixture
def context():
    return {'multiply_by': 3}
