import pytest

from viz_dashboard.services.session_manager import SessionManager, generate_session_id


class _Controller:
    pass


def test_generate_session_id_is_unique():
    ids = {generate_session_id() for _ in range(50)}
    assert len(ids) == 50
    assert all(i.startswith("session-") for i in ids)


def test_get_or_create_builds_once_per_session():
    sessions = SessionManager(_Controller)

    a = sessions.get_or_create("a")
    assert sessions.get_or_create("a") is a
    assert sessions.get_or_create("b") is not a
    assert len(sessions) == 2


def test_get_unknown_or_missing_session():
    sessions = SessionManager(_Controller)
    assert sessions.get(None) is None
    assert sessions.get("nope") is None
    assert "nope" not in sessions


def test_least_recently_used_session_is_evicted():
    sessions = SessionManager(_Controller, max_sessions=2)
    sessions.get_or_create("a")
    sessions.get_or_create("b")
    sessions.get("a")

    sessions.get_or_create("c")

    assert "a" in sessions
    assert "b" not in sessions
    assert "c" in sessions


def test_max_sessions_must_be_positive():
    with pytest.raises(ValueError):
        SessionManager(_Controller, max_sessions=0)
