"""Android runtime helpers.

This package intentionally contains *thin* wrappers around adb so that the
foreground-activity lookup stays auditable: each adb call is a single child
process whose output is scanned line by line and classified into a small
failure taxonomy (see `errors`).
"""

from current_activity.runtime.android.bridge import resolve_bridge_path
from current_activity.runtime.android.errors import (
    AdbError,
    ExecutionAdbError,
    FailureKind,
    MultipleDevicesAdbError,
    NoDeviceAdbError,
    ParseAdbError,
)
from current_activity.runtime.android.resolver import ActivityResolver
from current_activity.runtime.android.retry import (
    DeviceOutcome,
    ResolutionReport,
    resolve_foreground_activities,
)

__all__ = [
    "ActivityResolver",
    "AdbError",
    "DeviceOutcome",
    "ExecutionAdbError",
    "FailureKind",
    "MultipleDevicesAdbError",
    "NoDeviceAdbError",
    "ParseAdbError",
    "ResolutionReport",
    "resolve_bridge_path",
    "resolve_foreground_activities",
]
