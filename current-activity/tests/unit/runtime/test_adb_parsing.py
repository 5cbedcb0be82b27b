from __future__ import annotations

import pytest

from current_activity.runtime.android.errors import (
    FailureKind,
    MultipleDevicesAdbError,
    NoDeviceAdbError,
    ParseAdbError,
)
from current_activity.runtime.android.parsing import (
    classify_activity_line,
    parse_activity_output,
    parse_device_line,
    parse_device_list,
)


def test_classify_resumed_activity_returns_class_group() -> None:
    line = "    mResumedActivity: ActivityRecord{5f2 u0 com.example.app/com.example.app.MainActivity t12}"
    assert classify_activity_line(line) == "com.example.app.MainActivity"


def test_classify_short_component_keeps_leading_dot() -> None:
    line = "  ResumedActivity: ActivityRecord{1 u0 com.modern/.HomeActivity t2}"
    assert classify_activity_line(line) == ".HomeActivity"


def test_classify_non_decisive_lines() -> None:
    assert classify_activity_line("") is None
    assert classify_activity_line("Display #0 (activities from top to bottom):") is None
    assert classify_activity_line("  mLastPausedActivity: ActivityRecord{7a0 u0 a.b/a.b.C t1}") is None


def test_classify_malformed_trigger_line_is_parse_error() -> None:
    with pytest.raises(ParseAdbError) as excinfo:
        classify_activity_line("mResumedActivity: null")
    assert excinfo.value.kind is FailureKind.PARSE


def test_multiple_devices_wins_over_activity_pattern_on_same_line() -> None:
    line = "error: more than one device/emulator ResumedActivity x a.b/a.b.C"
    with pytest.raises(MultipleDevicesAdbError):
        classify_activity_line(line)


def test_device_not_found_line() -> None:
    with pytest.raises(NoDeviceAdbError):
        classify_activity_line("error: device not found")


def test_parse_activity_output_stops_at_first_decisive_line() -> None:
    lines = iter(
        [
            "ACTIVITY MANAGER ACTIVITIES",
            "  mResumedActivity: ActivityRecord{1 u0 com.example.app/com.example.app.MainActivity t1}",
            "  ResumedActivity: ActivityRecord{2 u0 com.other/com.other.OtherActivity t2}",
            "error: more than one device/emulator",
        ]
    )
    assert parse_activity_output(lines) == "com.example.app.MainActivity"
    assert list(lines) == [
        "  ResumedActivity: ActivityRecord{2 u0 com.other/com.other.OtherActivity t2}",
        "error: more than one device/emulator",
    ]


def test_parse_activity_output_ambiguous_before_any_activity_match() -> None:
    lines = [
        "error: more than one device/emulator",
        "  mResumedActivity: ActivityRecord{1 u0 com.example.app/com.example.app.MainActivity t1}",
    ]
    with pytest.raises(MultipleDevicesAdbError):
        parse_activity_output(lines)


def test_parse_activity_output_exhausted_is_parse_error() -> None:
    with pytest.raises(ParseAdbError):
        parse_activity_output(["nothing", "to", "see"])
    with pytest.raises(ParseAdbError):
        parse_activity_output([])


def test_parse_device_line_rules() -> None:
    assert parse_device_line("List of devices attached") is None
    assert parse_device_line("") is None
    assert parse_device_line("emulator-5554\tdevice") == "emulator-5554"
    assert parse_device_line("0123456789ABCDEF   unauthorized") == "0123456789ABCDEF"
    assert parse_device_line("* daemon not running; starting now at tcp:5037") is None


def test_parse_device_list_header_device_blank() -> None:
    lines = ["List of devices attached", "emulator-5554\tdevice", ""]
    assert parse_device_list(lines) == ["emulator-5554"]


def test_parse_device_list_keeps_order_and_duplicates() -> None:
    lines = ["List of devices attached", "b\tdevice", "a\tdevice", "b\tdevice"]
    assert parse_device_list(lines) == ["b", "a", "b"]


def test_parse_device_list_empty_is_parse_error() -> None:
    with pytest.raises(ParseAdbError):
        parse_device_list(["List of devices attached", ""])
