from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from appsettings.core.exceptions import SettingConflictException, SettingNotFoundException
from appsettings.services import setting_service
from appsettings.services.setting_service import SettingService, SettingWriteData

CREATED = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
UPDATED = datetime(2024, 2, 1, 9, 0, tzinfo=timezone.utc)


def _row(**overrides):
    data = dict(
        id="id-1",
        key="app.version",
        value="1.0.0",
        description="Current version",
        category="General",
        is_encrypted=False,
        created_at=CREATED,
        updated_at=CREATED,
    )
    data.update(overrides)
    return SimpleNamespace(**data)


class FakeStore:
    def __init__(self, rows=None):
        self.rows = {row.key: row for row in rows or []}
        self.inserted = []

    def find_all(self):
        return list(self.rows.values())

    def find_by_key(self, key):
        return self.rows.get(key)

    def find_by_category(self, category):
        return [row for row in self.rows.values() if row.category == category]

    def insert(self, setting):
        setting.id = "generated-id"
        self.inserted.append(setting)
        self.rows[setting.key] = setting
        return setting

    def replace_by_key(self, key, fields, updated_at):
        row = self.rows.get(key)
        if row is None:
            return None
        for name, value in fields.items():
            setattr(row, name, value)
        row.updated_at = updated_at
        return row

    def delete_by_key(self, key):
        return self.rows.pop(key, None) is not None


def test_get_by_key_raises_not_found():
    service = SettingService(FakeStore())

    with pytest.raises(SettingNotFoundException) as exc_info:
        service.get_by_key("missing")

    assert exc_info.value.key == "missing"
    assert exc_info.value.http_status == 404


def test_create_stamps_both_timestamps(monkeypatch):
    monkeypatch.setattr(setting_service, "utc_now", lambda: CREATED)
    store = FakeStore()
    service = SettingService(store)

    result = service.create(
        SettingWriteData(key="app.name", value="Demo", category="General")
    )

    assert result.id == "generated-id"
    assert result.created_at == CREATED
    assert result.updated_at == CREATED
    assert store.inserted[0].is_encrypted is False


def test_create_existing_key_conflicts_without_touching_record():
    existing = _row()
    store = FakeStore([existing])
    service = SettingService(store)

    with pytest.raises(SettingConflictException) as exc_info:
        service.create(SettingWriteData(key="app.version", value="2.0.0"))

    assert exc_info.value.http_status == 409
    assert store.inserted == []
    assert store.rows["app.version"].value == "1.0.0"


def test_create_reports_store_level_duplicate_as_conflict():
    class RacingStore(FakeStore):
        # Another request inserted the key after the existence check
        def insert(self, setting):
            raise SettingConflictException(setting.key)

    service = SettingService(RacingStore())

    with pytest.raises(SettingConflictException):
        service.create(SettingWriteData(key="app.version", value="1.0.0"))


def test_update_forces_path_key(monkeypatch):
    monkeypatch.setattr(setting_service, "utc_now", lambda: UPDATED)
    store = FakeStore([_row()])
    captured = {}
    original = store.replace_by_key

    def spy_replace(key, fields, updated_at):
        captured["key"] = key
        captured["fields"] = fields
        return original(key, fields, updated_at)

    monkeypatch.setattr(store, "replace_by_key", spy_replace)
    service = SettingService(store)

    result = service.update(
        "app.version",
        SettingWriteData(key="other.key", value="2.0.0", category="Release"),
    )

    assert result.key == "app.version"
    assert result.value == "2.0.0"
    assert result.category == "Release"
    assert result.description is None
    assert result.created_at == CREATED
    assert result.updated_at == UPDATED
    assert captured["key"] == "app.version"
    assert "key" not in captured["fields"]


def test_update_missing_key_raises_not_found():
    service = SettingService(FakeStore())

    with pytest.raises(SettingNotFoundException):
        service.update("missing", SettingWriteData(key="missing", value="x"))


def test_delete_then_get_is_not_found():
    service = SettingService(FakeStore([_row()]))

    service.delete("app.version")

    with pytest.raises(SettingNotFoundException):
        service.get_by_key("app.version")
    with pytest.raises(SettingNotFoundException):
        service.delete("app.version")


def test_get_by_category_filters_exactly():
    store = FakeStore(
        [
            _row(key="a", category="General"),
            _row(key="b", category="general"),
            _row(key="c", category="Theme"),
        ]
    )
    service = SettingService(store)

    assert [s.key for s in service.get_by_category("General")] == ["a"]
    assert service.get_by_category("Unused") == []
