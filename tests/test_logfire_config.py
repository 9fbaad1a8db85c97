from types import SimpleNamespace

from appsettings.api.schemas.requests import SettingRequest
from appsettings.core.logfire_config import custom_request_attributes_mapper


def _request():
    return SimpleNamespace(
        url=SimpleNamespace(path="/"),
        headers={"x-request-id": "rid-1"},
        method="POST",
    )


def test_encrypted_values_are_redacted():
    body = SettingRequest(key="db.password", value="hunter2", is_encrypted=True)

    attrs = custom_request_attributes_mapper(_request(), {"values": {"request": body}})

    assert attrs["values"]["request"] == {"key": "db.password", "value": "[REDACTED]"}
    assert attrs["request_id"] == "rid-1"
    assert body.value == "hunter2"


def test_plain_values_are_kept():
    body = SettingRequest(key="app.name", value="Fullstack Application")

    attrs = custom_request_attributes_mapper(_request(), {"values": {"request": body}})

    assert attrs["values"]["request"] is body
    assert attrs["method"] == "POST"


def test_validation_errors_are_reported():
    errors = [{"loc": ["body", "value"], "msg": "Field required"}]

    attrs = custom_request_attributes_mapper(_request(), {"errors": errors})

    assert attrs["errors"] == errors
    assert "values" not in attrs
