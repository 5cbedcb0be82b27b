"""Resolve the foreground activity, retrying per device when ambiguous.

adb refuses `shell` commands without `-s` when more than one device is
attached. In that case we list the devices and query each one in turn. Each
device's outcome is recorded on its own; a failure on one device never hides
the result of another.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from current_activity.runtime.android.errors import (
    UI_ANOMALY_MESSAGE,
    AdbError,
    ExecutionAdbError,
    MultipleDevicesAdbError,
    NoDeviceAdbError,
    ParseAdbError,
    describe_failure,
)

_log = logging.getLogger(__name__)


class ForegroundActivitySource(Protocol):
    def query_foreground_activity(self, device_id: Optional[str] = None) -> str: ...

    def list_device_ids(self) -> List[str]: ...


@dataclass(frozen=True)
class DeviceOutcome:
    device_id: Optional[str]
    activity: Optional[str] = None
    error: Optional[AdbError] = None
    # A device-scoped query reported "more than one device".
    anomaly: bool = False

    def ok(self) -> bool:
        return self.activity is not None

    def message(self) -> str:
        if self.activity is not None:
            return self.activity
        if self.anomaly or self.error is None:
            return UI_ANOMALY_MESSAGE
        return describe_failure(self.error)

    def to_dict(self) -> dict:
        return {
            "device_id": self.device_id,
            "ok": self.ok(),
            "activity": self.activity,
            "failure_kind": self.error.kind.value if self.error is not None else None,
            "anomaly": self.anomaly,
            "message": self.message(),
        }


@dataclass(frozen=True)
class ResolutionReport:
    outcomes: List[DeviceOutcome] = field(default_factory=list)
    retried_per_device: bool = False

    def successes(self) -> List[DeviceOutcome]:
        return [o for o in self.outcomes if o.ok()]

    def failures(self) -> List[DeviceOutcome]:
        return [o for o in self.outcomes if not o.ok()]


def _query_device(
    source: ForegroundActivitySource, device_id: str, log: logging.Logger
) -> DeviceOutcome:
    try:
        activity = source.query_foreground_activity(device_id)
    except MultipleDevicesAdbError as e:
        # Should never happen since we passed a device id.
        log.error("Got a multiple devices message when passing device id %s", device_id, exc_info=e)
        return DeviceOutcome(device_id=device_id, error=e, anomaly=True)
    except (ExecutionAdbError, ParseAdbError, NoDeviceAdbError) as e:
        log.warning("device %s: %s", device_id, describe_failure(e))
        return DeviceOutcome(device_id=device_id, error=e)
    return DeviceOutcome(device_id=device_id, activity=activity)


def resolve_foreground_activities(
    source: ForegroundActivitySource, *, logger: Optional[logging.Logger] = None
) -> ResolutionReport:
    """Query without a device id, then once per device if adb says it is ambiguous.

    NoDeviceAdbError, ParseAdbError and ExecutionAdbError from the first query
    (and any failure while listing devices) propagate to the caller.
    """

    log = logger or _log
    try:
        activity = source.query_foreground_activity(None)
    except MultipleDevicesAdbError:
        log.info("Multiple devices detected, get the list and try again")
    else:
        return ResolutionReport(outcomes=[DeviceOutcome(device_id=None, activity=activity)])

    device_ids = source.list_device_ids()
    outcomes = [_query_device(source, device_id, log) for device_id in device_ids]
    return ResolutionReport(outcomes=outcomes, retried_per_device=True)
