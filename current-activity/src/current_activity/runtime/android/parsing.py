"""Line parsers for adb output.

`adb shell dumpsys activity activities` and `adb devices` print
human-readable text. The rules here are deliberately literal:

  mResumedActivity: ActivityRecord{5f2 u0 com.example.app/com.example.app.MainActivity t12}
  emulator-5554	device

The resolver feeds lines in emission order; these helpers decide what each
line means and stop at the first decisive one.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import List, Optional

from current_activity.runtime.android.errors import (
    MultipleDevicesAdbError,
    NoDeviceAdbError,
    ParseAdbError,
)

RESUMED_ACTIVITY_MARKER = "ResumedActivity"
MULTIPLE_DEVICES_MARKER = "more than one device"
DEVICE_NOT_FOUND_MARKER = "device not found"
DEVICE_LIST_HEADER_MARKER = "List"
DAEMON_STATUS_PREFIX = "*"

# Whole-line matches: `<anything> <package>/<class><anything>`.
_ACTIVITY_NAME_RE = re.compile(r".* ([a-zA-Z0-9.]+)/([a-zA-Z0-9.]+).*")
_DEVICE_LIST_ITEM_RE = re.compile(r"(.+)\s+(.+)")


def classify_activity_line(line: str) -> Optional[str]:
    """Classify one line of `dumpsys activity activities` output.

    Returns the resumed activity class name when the line carries it, or
    None when the line is not decisive. Decisive failure lines raise.
    """

    if MULTIPLE_DEVICES_MARKER in line:
        raise MultipleDevicesAdbError()
    if DEVICE_NOT_FOUND_MARKER in line:
        raise NoDeviceAdbError()
    if RESUMED_ACTIVITY_MARKER in line:
        m = _ACTIVITY_NAME_RE.fullmatch(line)
        if not m:
            raise ParseAdbError("Could not find the focused Activity in the line")
        return m.group(2)
    return None


def parse_activity_output(lines: Iterable[str]) -> str:
    """Return the resumed activity from the first decisive line.

    Consumption stops at that line, so a lazy `lines` iterable is never read
    past it.
    """

    for line in lines:
        activity = classify_activity_line(line)
        if activity is not None:
            return activity
    raise ParseAdbError("Could not find the focused Activity in the output")


def parse_device_line(line: str) -> Optional[str]:
    """Return the device serial on an `adb devices` row, else None."""

    if DEVICE_LIST_HEADER_MARKER in line:
        return None
    # adb prints `* daemon not running; starting now ...` before the list.
    if line.startswith(DAEMON_STATUS_PREFIX):
        return None
    m = _DEVICE_LIST_ITEM_RE.fullmatch(line)
    if not m:
        return None
    return m.group(1).strip()


def parse_device_list(lines: Iterable[str]) -> List[str]:
    device_ids: List[str] = []
    for line in lines:
        device_id = parse_device_line(line)
        if device_id is not None:
            device_ids.append(device_id)
    if not device_ids:
        raise ParseAdbError("Could not find devices in the output")
    return device_ids
