"""Unit tests for structlog configuration."""

import logging

import pytest
import structlog

from infrastructure.logging import configure_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def _processors() -> list:
    return structlog.get_config()["processors"]


class TestConfigureLogging:
    def test_json_output_without_tty(self, monkeypatch):
        monkeypatch.delenv("FORCE_COLOR", raising=False)
        monkeypatch.setattr("sys.stdout.isatty", lambda: False)

        configure_logging()

        assert isinstance(_processors()[-1], structlog.processors.JSONRenderer)

    def test_force_color_selects_console_renderer(self, monkeypatch):
        monkeypatch.setenv("FORCE_COLOR", "1")

        configure_logging()

        assert isinstance(_processors()[-1], structlog.dev.ConsoleRenderer)

    def test_merges_execution_context_vars(self):
        configure_logging()

        assert _processors()[0] is structlog.contextvars.merge_contextvars

    def test_app_name_is_added_without_overriding(self, monkeypatch):
        monkeypatch.delenv("FORCE_COLOR", raising=False)
        monkeypatch.setattr("sys.stdout.isatty", lambda: False)

        configure_logging(app_name="Teamchat")
        add_app = _processors()[3]

        assert add_app(None, "info", {"event": "x"})["app"] == "Teamchat"
        assert add_app(None, "info", {"event": "x", "app": "other"})["app"] == "other"

    @pytest.mark.parametrize(
        ("debug", "level"), [(False, logging.INFO), (True, logging.DEBUG)]
    )
    def test_debug_controls_level(self, debug, level):
        configure_logging(debug=debug)

        wrapper = structlog.get_config()["wrapper_class"]
        assert wrapper is structlog.make_filtering_bound_logger(level)
