import logging

from gatehouse.logging_config import HealthCheckFilter, get_logging_config


def _record(name: str, message: str) -> logging.LogRecord:
    return logging.LogRecord(name, logging.INFO, __file__, 1, message, None, None)


def test_health_check_access_logs_are_suppressed():
    log_filter = HealthCheckFilter()

    assert log_filter.filter(_record("uvicorn.access", '127.0.0.1 - "GET /healthz HTTP/1.1" 200')) is False
    assert log_filter.filter(_record("uvicorn.access", '127.0.0.1 - "GET /health HTTP/1.1" 200')) is False
    assert log_filter.filter(_record("uvicorn.access", '127.0.0.1 - "GET /sessions/abc HTTP/1.1" 200')) is True
    assert log_filter.filter(_record("gatehouse.sessions", "GET /health")) is True


def test_logging_config_level():
    config = get_logging_config("debug")

    assert config["loggers"]["gatehouse"]["level"] == "DEBUG"
    assert config["root"]["level"] == "DEBUG"
    assert "health_check_filter" in config["handlers"]["access"]["filters"]
