import pytest

from sluggable.core.config import Settings
from sluggable.core.context import enable_slug
from sluggable.db.init_db import init_db
from sluggable.db.session import create_session_factory, get_db

import slug_models  # noqa: F401  registers the test tables on Base


@pytest.fixture
def slug_settings():
    return Settings(SLUG_ENABLED=True, SLUG_GENERATOR=None, SLUG_MAX_ATTEMPTS=100, SLUG_FAIL_OPEN=True)


@pytest.fixture
def session_factory():
    factory = create_session_factory("sqlite://")
    engine = factory.kw["bind"]
    init_db(engine)
    yield factory
    engine.dispose()


@pytest.fixture
def slug_context(session_factory, slug_settings):
    context = enable_slug(session_factory, settings=slug_settings)
    yield context
    context.disable()


@pytest.fixture
def db(session_factory, slug_context):
    yield from get_db(session_factory)
