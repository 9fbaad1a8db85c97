import pytest

from appsettings.core.error_codes import (
    APIErrorCode,
    DatabaseErrorCode,
    get_http_status_code,
)
from appsettings.core.exceptions import (
    ApplicationException,
    DatabaseException,
    SettingConflictException,
    SettingNotFoundException,
)


def test_setting_errors_map_to_http_status():
    assert SettingNotFoundException("k").http_status == 404
    assert SettingConflictException("k").http_status == 409
    assert get_http_status_code("SETTING_KEY_CONFLICT") == 409
    assert get_http_status_code("UNKNOWN_CODE") == 500


def test_default_codes():
    assert ApplicationException("boom").error_code == APIErrorCode.INTERNAL_ERROR
    assert DatabaseException("boom").error_code == DatabaseErrorCode.QUERY_FAILED
    assert (
        DatabaseException("down", DatabaseErrorCode.CONNECTION_FAILED).http_status
        == 503
    )


def test_to_dict_includes_chained_cause():
    with pytest.raises(DatabaseException) as exc_info:
        try:
            raise RuntimeError("boom")
        except RuntimeError as e:
            raise DatabaseException(
                "Failed to load setting", details={"key": "k", "obj": object()}
            ) from e

    data = exc_info.value.to_dict()

    assert data["code"] == "DATABASE_QUERY_FAILED"
    assert data["details"]["key"] == "k"
    assert data["details"]["obj"].startswith("<object object")
    assert data["cause"] == {"type": "RuntimeError", "message": "boom"}
