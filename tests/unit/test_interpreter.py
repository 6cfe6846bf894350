"""Unit tests for the line interpreter."""

import logging

import pytest

from hyprland_event_monitor.catalog import EventCatalog
from hyprland_event_monitor.errors import ArityError, ErrorCode, FieldTypeError, FormatError
from hyprland_event_monitor.events import (
    ConfigReloaded,
    Fullscreen,
    MoveWindow,
    OpenWindow,
    UnknownEvent,
    Workspace,
    WorkspaceV2,
)
from hyprland_event_monitor.interpreter import Interpreter, interpret, split_line


class TestSplitLine:
    """Tag/payload boundary detection."""

    def test_splits_on_first_delimiter(self):
        assert split_line("workspace>>a>>b") == ("workspace", "a>>b")

    def test_empty_payload(self):
        assert split_line("configreloaded>>") == ("configreloaded", "")

    def test_missing_delimiter(self):
        with pytest.raises(FormatError) as exc_info:
            split_line("garbage")

        error = exc_info.value
        assert error.code == ErrorCode.INVALID_FORMAT
        assert error.raw_line == "garbage"
        assert "garbage" in str(error)

    def test_single_angle_bracket_is_not_a_delimiter(self):
        with pytest.raises(FormatError):
            split_line("workspace>1")


class TestInterpret:
    """End-to-end decoding of single lines."""

    def test_workspace_v2(self):
        assert interpret("workspacev2>>3,main") == WorkspaceV2(id=3, name="main")

    def test_open_window(self):
        assert interpret("openwindow>>0x123,1,firefox,Example Title") == OpenWindow(
            address="0x123", workspace="1", window_class="firefox", title="Example Title"
        )

    @pytest.mark.parametrize("line,entered", [
        ("fullscreen>>1", True),
        ("fullscreen>>0", False),
        ("fullscreen>>x", False),
    ])
    def test_fullscreen_truthy_one(self, line, entered):
        assert interpret(line) == Fullscreen(entered=entered)

    def test_config_reloaded(self):
        assert interpret("configreloaded>>") == ConfigReloaded()

    def test_payload_may_contain_delimiter(self):
        assert interpret("workspace>>odd>>name") == Workspace(name="odd>>name")

    def test_same_line_twice(self):
        assert interpret("movewindow>>0x1,2") == interpret("movewindow>>0x1,2") == MoveWindow(
            address="0x1", workspace="2"
        )


class TestDecodeFailures:
    """Malformed lines raise structured, recoverable errors."""

    def test_format_error(self):
        with pytest.raises(FormatError):
            interpret("garbage")

    def test_arity_error_carries_raw_line(self):
        with pytest.raises(ArityError) as exc_info:
            interpret("movewindow>>addressonly")

        error = exc_info.value
        assert error.raw_line == "movewindow>>addressonly"
        assert error.to_dict()["context"]["raw_line"] == "movewindow>>addressonly"
        assert error.to_dict()["error"] == "arity_mismatch"

    def test_field_type_error_carries_raw_line(self):
        with pytest.raises(FieldTypeError) as exc_info:
            interpret("renameworkspace>>x,music")
        assert exc_info.value.raw_line == "renameworkspace>>x,music"


class TestUnknownTags:
    """Unknown tags are logged and preserved, never misclassified."""

    def test_unknown_tag_fallback(self, caplog):
        with caplog.at_level(logging.WARNING, logger="hyprland_event_monitor.interpreter"):
            event = interpret("futuretag>>1,2")

        assert event == UnknownEvent(tag="futuretag", payload="1,2")
        assert event != ConfigReloaded()

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "futuretag" in warnings[0].getMessage()
        assert warnings[0].payload == "1,2"
        assert warnings[0].code == "UNKNOWN_TAG"

    def test_tag_match_is_case_sensitive(self):
        assert interpret("Workspace>>1") == UnknownEvent(tag="Workspace", payload="1")

    def test_custom_catalog(self):
        interpreter = Interpreter(EventCatalog([Workspace]))
        assert interpreter.interpret("workspace>>1") == Workspace(name="1")
        assert isinstance(interpreter.interpret("fullscreen>>1"), UnknownEvent)
