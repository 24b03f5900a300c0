"""Tests for logging helpers."""
import json
import logging

from bonusplan.utils.logging_utils import JsonFormatter, PlanLoggerAdapter, setup_logging


def _record(message, **extra):
    record = logging.LogRecord("bonusplan.test", logging.INFO, __file__, 10, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    def test_basic_fields(self):
        payload = json.loads(JsonFormatter().format(_record("hello")))
        assert payload["message"] == "hello"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "bonusplan.test"

    def test_includes_plan_context(self):
        payload = json.loads(JsonFormatter().format(_record("x", plan_context={"mode": "custom"})))
        assert payload["plan_context"] == {"mode": "custom"}


class TestPlanLoggerAdapter:
    def test_appends_context(self):
        adapter = PlanLoggerAdapter(logging.getLogger("bonusplan.test"), {"mode": "generic"})
        msg, kwargs = adapter.process("Plan ready", {})
        assert msg == "Plan ready [mode=generic]"
        assert kwargs["extra"]["plan_context"] == {"mode": "generic"}

    def test_no_context(self):
        adapter = PlanLoggerAdapter(logging.getLogger("bonusplan.test"))
        msg, _ = adapter.process("Plan ready", {})
        assert msg == "Plan ready"


def test_setup_logging_to_file(tmp_path):
    log_file = tmp_path / "logs" / "plan.log"
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    try:
        setup_logging("INFO", str(log_file), json_format=True)
        logging.getLogger("bonusplan.test").info("written")
        for handler in root.handlers:
            handler.flush()
        line = log_file.read_text().strip().splitlines()[-1]
        assert json.loads(line)["message"] == "written"
    finally:
        for handler in root.handlers:
            if handler not in before:
                handler.close()
                root.removeHandler(handler)
        root.setLevel(level)
