"""Shared fixtures for the rulestate test-suite."""
from __future__ import annotations

import pytest

from rulestate.config import CONFIG_FILE_ENV, VALIDATE_ON_CHANGE_ENV, VALIDATE_ON_INIT_ENV


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):  # noqa: D401
    """Keep host RULESTATE_* settings from leaking into option resolution."""
    for name in (CONFIG_FILE_ENV, VALIDATE_ON_INIT_ENV, VALIDATE_ON_CHANGE_ENV):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture(autouse=True)
def _silence_logging(caplog):  # noqa: D401
    """Reduce noise – most tests assert behaviour, not log output."""
    caplog.set_level("WARNING")
    yield


@pytest.fixture()
def sign_rules():  # noqa: D401
    """One positive and one negative number rule."""
    return {
        "a": (1, lambda x: x > 0),
        "b": (-1, lambda x: x > 0),
    }


@pytest.fixture()
def form_rules():  # noqa: D401
    """Rules over a small sign-up form, including a composite input."""

    def build(name="", password="", confirm=""):
        return {
            "name_entered": (name, lambda s: len(s) > 0),
            "password_long": (password, lambda s: len(s) >= 8),
            "passwords_match": (
                {"password": password, "confirm": confirm},
                lambda v: v["password"] == v["confirm"],
            ),
        }

    return build


class CallRecorder:
    """Predicate wrapper counting how often (and with what) it was called."""

    def __init__(self, predicate):
        self.predicate = predicate
        self.calls = []

    def __call__(self, value):
        self.calls.append(value)
        return self.predicate(value)


@pytest.fixture()
def recorder():  # noqa: D401
    """Factory for :class:`CallRecorder` predicates."""
    return CallRecorder
