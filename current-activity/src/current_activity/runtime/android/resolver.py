"""Foreground activity lookup through adb.

Two adb invocations are supported:

  adb [-s <serial>] shell dumpsys activity activities
  adb devices

Each call owns one child process. stderr is merged into stdout (adb reports
"more than one device" and "device not found" on stderr), the output is read
line by line, and the process is terminated before the call returns or
raises. The exit code is never inspected; only the text and I/O errors decide
the outcome.
"""

from __future__ import annotations

import contextlib
import logging
import subprocess
from collections.abc import Iterator
from typing import List, Optional

from current_activity.runtime.android.errors import ExecutionAdbError
from current_activity.runtime.android.parsing import parse_activity_output, parse_device_list

_TERMINATE_WAIT_S = 5.0


def _terminate(proc: subprocess.Popen, log: logging.Logger) -> None:
    """Best-effort: stop the child and release its pipe."""

    try:
        if proc.poll() is None:
            proc.terminate()
            try:
                proc.wait(timeout=_TERMINATE_WAIT_S)
            except subprocess.TimeoutExpired:
                proc.kill()
    except OSError as e:
        log.debug("could not terminate adb (pid=%s): %s", getattr(proc, "pid", None), e)
    finally:
        if proc.stdout is not None:
            proc.stdout.close()


class ActivityResolver:
    """Query the resumed activity and the attached devices via adb."""

    def __init__(self, adb_path: str, *, logger: Optional[logging.Logger] = None) -> None:
        self._adb_path = adb_path
        self._log = logger or logging.getLogger(__name__)

    @property
    def adb_path(self) -> str:
        return self._adb_path

    def activity_cmd(self, device_id: Optional[str] = None) -> list[str]:
        cmd = [self._adb_path]
        if device_id is not None:
            cmd += ["-s", device_id]
        return cmd + ["shell", "dumpsys", "activity", "activities"]

    def devices_cmd(self) -> list[str]:
        return [self._adb_path, "devices"]

    @contextlib.contextmanager
    def _spawn(self, cmd: list[str]) -> Iterator[subprocess.Popen]:
        self._log.info("running %s", " ".join(cmd))
        try:
            proc = subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            self._log.error("Could not exec adb", exc_info=True)
            raise ExecutionAdbError(e) from e
        try:
            yield proc
        finally:
            _terminate(proc, self._log)

    def _lines(self, proc: subprocess.Popen) -> Iterator[str]:
        assert proc.stdout is not None
        for raw in proc.stdout:
            line = raw.rstrip("\r\n")
            self._log.debug("line=%r", line)
            yield line

    def query_foreground_activity(self, device_id: Optional[str] = None) -> str:
        """Return the resumed activity (`package/class` -> class) on a device.

        Raises:
            MultipleDevicesAdbError: several devices attached and no device_id.
            NoDeviceAdbError: adb found no (matching) device.
            ParseAdbError: no parsable resumed-activity line in the output.
            ExecutionAdbError: adb could not be started or read.
        """

        with self._spawn(self.activity_cmd(device_id)) as proc:
            try:
                activity = parse_activity_output(self._lines(proc))
            except OSError as e:
                self._log.error("Could not read from the adb process", exc_info=True)
                raise ExecutionAdbError(e) from e
        self._log.info("resumed activity=%s (device=%s)", activity, device_id)
        return activity

    def list_device_ids(self) -> List[str]:
        """Return attached device serials in `adb devices` order.

        An empty list is reported as ParseAdbError.
        """

        with self._spawn(self.devices_cmd()) as proc:
            try:
                device_ids = parse_device_list(self._lines(proc))
            except OSError as e:
                self._log.error("Could not read from the adb process", exc_info=True)
                raise ExecutionAdbError(e) from e
        self._log.info("device ids=%s", device_ids)
        return device_ids
