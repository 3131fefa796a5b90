import sqlite3
from datetime import datetime

import pytest

from housing.services.backup import BackupError, backup_database, backup_filename
from housing.services.system_settings import get_system_settings
from housing.tasks import maintenance as tasks


def test_backup_filename():
    assert backup_filename(datetime(2026, 1, 2, 3, 4, 5), ".sql") == "backup-2026-01-02T03-04-05.sql"


def test_sqlite_file_is_copied(tmp_path):
    database = tmp_path / "housing.db"
    with sqlite3.connect(database) as conn:
        conn.execute("CREATE TABLE rooms (id TEXT)")
        conn.execute("INSERT INTO rooms VALUES ('r1')")

    target = backup_database(f"sqlite:///{database}", tmp_path / "backups", datetime(2026, 1, 2))

    assert target.name == "backup-2026-01-02T00-00-00.sqlite3"
    with sqlite3.connect(target) as conn:
        assert conn.execute("SELECT id FROM rooms").fetchall() == [("r1",)]


def test_in_memory_database_cannot_be_backed_up(tmp_path):
    with pytest.raises(BackupError):
        backup_database("sqlite://", tmp_path)


def test_unsupported_backend(tmp_path):
    with pytest.raises(BackupError, match="Unsupported database backend"):
        backup_database("mysql://user:pw@localhost/housing", tmp_path)


def test_backup_task_reports_failure(monkeypatch, tmp_path):
    monkeypatch.setattr(tasks.settings, "DATABASE_URL", "sqlite://")
    monkeypatch.setattr(tasks.settings, "BACKUP_DIR", str(tmp_path))

    result = tasks.backup_database_task()

    assert result["success"] is False
    assert "In-memory" in result["error"]


def test_backup_task_records_time(monkeypatch, engine, session, tmp_path):
    database = tmp_path / "housing.db"
    sqlite3.connect(database).close()
    monkeypatch.setattr(tasks.settings, "DATABASE_URL", f"sqlite:///{database}")
    monkeypatch.setattr(tasks.settings, "BACKUP_DIR", str(tmp_path / "backups"))
    monkeypatch.setattr(tasks, "engine", engine)

    result = tasks.backup_database_task()

    assert result["success"] is True
    assert get_system_settings(session).last_backup_time is not None


def test_cleanup_task(monkeypatch, engine, tmp_path):
    (tmp_path / "orphan.png").write_bytes(b"png")
    monkeypatch.setattr(tasks.settings, "UPLOAD_DIR", str(tmp_path))
    monkeypatch.setattr(tasks, "engine", engine)

    assert tasks.cleanup_uploads_task() == {"deleted": 1}
