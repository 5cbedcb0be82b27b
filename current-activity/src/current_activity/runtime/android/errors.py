"""Failure taxonomy for adb queries.

Every failure raised by `ActivityResolver` is one of four kinds. Callers
branch on `error.kind` (or on the concrete class) and must handle all four:

- EXECUTION: adb could not be started or its output could not be read
- AMBIGUOUS_DEVICE: more than one device is attached; retry per device
- NO_DEVICE: adb reports that no (matching) device is attached
- PARSE: adb output did not contain what we were looking for
"""

from __future__ import annotations

import enum
from typing import Optional


class FailureKind(str, enum.Enum):
    EXECUTION = "execution"
    AMBIGUOUS_DEVICE = "ambiguous_device"
    NO_DEVICE = "no_device"
    PARSE = "parse"


class AdbError(RuntimeError):
    """Base class for classified adb failures."""

    kind: FailureKind


class ExecutionAdbError(AdbError):
    kind = FailureKind.EXECUTION

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"could not execute adb or read its output: {cause}")
        self.cause = cause


class MultipleDevicesAdbError(AdbError):
    kind = FailureKind.AMBIGUOUS_DEVICE

    def __init__(self, message: str = "more than one device/emulator attached") -> None:
        super().__init__(message)


class NoDeviceAdbError(AdbError):
    kind = FailureKind.NO_DEVICE

    def __init__(self, message: str = "no device/emulator found") -> None:
        super().__init__(message)


class ParseAdbError(AdbError):
    kind = FailureKind.PARSE


UI_ANOMALY_MESSAGE = "Something went wrong!"


def describe_failure(error: AdbError) -> str:
    """Return the one-line status message shown for a terminal failure."""

    kind: Optional[FailureKind] = getattr(error, "kind", None)
    if kind is FailureKind.EXECUTION:
        cause = getattr(error, "cause", None)
        return f"Could not execute adb ({cause})"
    if kind is FailureKind.PARSE:
        return "Could not parse adb output"
    if kind is FailureKind.NO_DEVICE:
        return "Could not find any devices or emulators"
    if kind is FailureKind.AMBIGUOUS_DEVICE:
        return "Multiple devices or emulators attached"
    raise ValueError(f"unknown adb failure kind: {kind!r}")
