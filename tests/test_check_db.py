import pytest
from sqlalchemy import create_engine

from app import check_db


def test_check_connection_succeeds():
    ok, detail = check_db.check_connection()
    assert ok
    assert detail


def test_check_connection_reports_failure(tmp_path):
    missing = tmp_path / "no-such-dir" / "recipes.db"
    engine = create_engine(f"sqlite:///{missing}")

    ok, detail = check_db.check_connection(engine)

    assert not ok
    assert "unable to open database file" in detail


def test_main_exits_non_zero_on_failure(monkeypatch):
    monkeypatch.setattr(check_db, "check_connection", lambda: (False, "connection refused"))
    with pytest.raises(SystemExit) as exc_info:
        check_db.main()
    assert exc_info.value.code == 1
