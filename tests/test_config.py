import pytest
from pydantic import ValidationError

from sluggable.core.config import Settings


def test_defaults(monkeypatch):
    for name in ("SLUG_ENABLED", "SLUG_GENERATOR", "SLUG_MAX_ATTEMPTS", "SLUG_FAIL_OPEN"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()

    assert settings.SLUG_ENABLED is True
    assert settings.SLUG_GENERATOR is None
    assert settings.SLUG_MAX_ATTEMPTS == 100
    assert settings.SLUG_FAIL_OPEN is True


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("SLUG_ENABLED", "false")
    monkeypatch.setenv("SLUG_GENERATOR", "myapp.slugs:AsciiSlugGenerator")
    monkeypatch.setenv("SLUG_MAX_ATTEMPTS", "25")
    monkeypatch.setenv("SLUG_FAIL_OPEN", "0")

    settings = Settings()

    assert settings.SLUG_ENABLED is False
    assert settings.SLUG_GENERATOR == "myapp.slugs:AsciiSlugGenerator"
    assert settings.SLUG_MAX_ATTEMPTS == 25
    assert settings.SLUG_FAIL_OPEN is False


def test_max_attempts_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(SLUG_MAX_ATTEMPTS=0)
