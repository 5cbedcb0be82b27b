"""Locate the adb executable inside an Android SDK."""

from __future__ import annotations

import logging
import os
from typing import Optional

log = logging.getLogger(__name__)

ADB_SUBPATH = "/platform-tools/"
ADB_WINDOWS = "adb.exe"
ADB_UNIX = "adb"


def host_is_windows() -> bool:
    return os.name == "nt"


def adb_executable_name(*, is_windows: Optional[bool] = None) -> str:
    if is_windows is None:
        is_windows = host_is_windows()
    return ADB_WINDOWS if is_windows else ADB_UNIX


def resolve_bridge_path(sdk_root: str, *, is_windows: Optional[bool] = None) -> str:
    """Return the path of adb under `sdk_root`.

    The path is derived from the SDK root and the host OS family only; whether
    the file exists is discovered when it is executed.
    """

    adb_path = sdk_root + ADB_SUBPATH + adb_executable_name(is_windows=is_windows)
    log.debug("adb_path=%r", adb_path)
    return adb_path
