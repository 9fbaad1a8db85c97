from datetime import datetime, timezone

import pytest
from sqlalchemy import inspect

from appsettings.core.exceptions import DatabaseException, SettingConflictException
from appsettings.models import Setting
from appsettings.stores.setting_store import SettingStore


def _setting(key: str, category: str = "General", value: str = "v") -> Setting:
    return Setting(key=key, value=value, category=category)


def test_insert_assigns_id_and_timestamps(store: SettingStore):
    row = store.insert(_setting("app.name"))

    assert row.id
    assert row.created_at is not None
    assert row.updated_at is not None
    assert row.is_encrypted is False


def test_unique_index_rejects_duplicate_key(store: SettingStore):
    store.insert(_setting("app.name", value="first"))

    with pytest.raises(SettingConflictException):
        store.insert(_setting("app.name", value="second"))

    assert store.find_by_key("app.name").value == "first"
    assert len(store.find_all()) == 1


def test_other_integrity_errors_are_not_conflicts(store: SettingStore):
    with pytest.raises(DatabaseException) as exc_info:
        store.insert(Setting(key="app.name", value=None))

    assert not isinstance(exc_info.value, SettingConflictException)
    assert exc_info.value.http_status == 500
    assert store.find_all() == []


def test_find_by_category_is_exact_and_case_sensitive(store: SettingStore):
    store.insert(_setting("a", "General"))
    store.insert(_setting("b", "General"))
    store.insert(_setting("c", "general"))
    store.insert(_setting("d", "Theme"))

    assert sorted(s.key for s in store.find_by_category("General")) == ["a", "b"]
    assert store.find_by_category("Missing") == []


def test_replace_keeps_identity_and_creation_time(store: SettingStore):
    original = store.insert(
        Setting(key="app.theme", value="blue", description="old", category="Theme")
    )
    stamp = datetime(2030, 1, 1, tzinfo=timezone.utc)

    replaced = store.replace_by_key(
        "app.theme",
        {"value": "red", "description": None, "category": "UI", "is_encrypted": True},
        updated_at=stamp,
    )

    assert replaced.id == original.id
    assert replaced.created_at == original.created_at
    assert replaced.value == "red"
    assert replaced.description is None
    assert replaced.category == "UI"
    assert replaced.is_encrypted is True
    assert replaced.updated_at.replace(tzinfo=timezone.utc) == stamp


def test_replace_missing_returns_none(store: SettingStore):
    stamp = datetime.now(timezone.utc)
    assert store.replace_by_key("missing", {"value": "x"}, updated_at=stamp) is None


def test_delete_by_key(store: SettingStore):
    store.insert(_setting("app.name"))

    assert store.delete_by_key("app.name") is True
    assert store.find_by_key("app.name") is None
    assert store.delete_by_key("app.name") is False


def test_schema_has_expected_indexes(engine):
    indexes = inspect(engine).get_indexes(Setting.__tablename__)
    by_column = {tuple(ix["column_names"]): ix for ix in indexes}

    assert by_column[("key",)]["unique"]
    assert ("category",) in by_column
    assert ("created_at",) in by_column


def test_database_errors_are_wrapped(engine, session_factory):
    store = SettingStore(session_factory)
    Setting.__table__.drop(engine)

    with pytest.raises(DatabaseException) as exc_info:
        store.find_all()

    assert exc_info.value.http_status == 500
