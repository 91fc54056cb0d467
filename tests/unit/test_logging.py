import json
import logging

from chainflow.utils.logging import REDACTED, JsonFormatter, redact


def test_redact_masks_nested_sensitive_keys() -> None:
    payload = {
        "email": "a@b.co",
        "password": "secret",
        "nested": {"access_token": "abc", "items": [{"hashed_password": "x", "sku": "WGT-001"}]},
    }
    masked = redact(payload)

    assert masked["email"] == "a@b.co"
    assert masked["password"] == REDACTED
    assert masked["nested"]["access_token"] == REDACTED
    assert masked["nested"]["items"][0]["hashed_password"] == REDACTED
    assert masked["nested"]["items"][0]["sku"] == "WGT-001"


def test_json_formatter_includes_extras_and_service() -> None:
    record = logging.LogRecord(
        name="chainflow.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="order_created id=%s",
        args=(5,),
        exc_info=None,
    )
    record.event_payload = {"token": "abc", "total": 116}

    line = json.loads(JsonFormatter(service="chainflow-test").format(record))

    assert line["message"] == "order_created id=5"
    assert line["service"] == "chainflow-test"
    assert line["level"] == "INFO"
    assert line["event_payload"] == {"token": REDACTED, "total": 116}
