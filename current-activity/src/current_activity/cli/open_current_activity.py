from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from current_activity.config import ConfigError, resolve_sdk_root
from current_activity.integration.source_lookup import (
    EXT_JAVA,
    EXT_KOTLIN,
    find_activity_sources,
    simple_class_name,
)
from current_activity.runtime.android.bridge import resolve_bridge_path
from current_activity.runtime.android.errors import (
    ExecutionAdbError,
    NoDeviceAdbError,
    ParseAdbError,
    describe_failure,
)
from current_activity.runtime.android.resolver import ActivityResolver
from current_activity.runtime.android.retry import (
    DeviceOutcome,
    ResolutionReport,
    resolve_foreground_activities,
)

log = logging.getLogger(__name__)

UI_NO_SDK_MESSAGE = "Could not find the path for the Android SDK.  Have you configured it?"

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NO_SDK = 2


def _json_dumps(obj: Any) -> str:
    return json.dumps(obj, indent=2, ensure_ascii=False)


def _outcome_entry(outcome: DeviceOutcome, project_root: Optional[Path]) -> Dict[str, Any]:
    entry = outcome.to_dict()
    entry["sources"] = None
    if outcome.activity is not None and project_root is not None:
        sources = find_activity_sources(project_root, outcome.activity)
        entry["sources"] = [str(p) for p in sources]
    return entry


def _format_entry(entry: Dict[str, Any]) -> List[str]:
    device = entry["device_id"] or "device"
    if not entry["ok"]:
        return [f"{device}: {entry['message']}"]
    activity = entry["activity"]
    sources = entry["sources"]
    if sources is None:
        return [f"{device}: {activity}"]
    if not sources:
        name = simple_class_name(activity)
        return [
            f"{device}: {activity}: "
            f"Could not find {name}{EXT_JAVA} or {name}{EXT_KOTLIN} in project"
        ]
    return [f"{device}: {activity} -> {src}" for src in sources]


def report_to_dict(report: ResolutionReport, project_root: Optional[Path]) -> Dict[str, Any]:
    return {
        "retried_per_device": report.retried_per_device,
        "outcomes": [_outcome_entry(o, project_root) for o in report.outcomes],
    }


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Print the Activity in the foreground on the attached device(s)."
    )
    parser.add_argument(
        "--sdk_root",
        type=str,
        default=None,
        help="Android SDK root (default: SDK registry, $ANDROID_SDK_ROOT or $ANDROID_HOME)",
    )
    parser.add_argument(
        "--sdk_registry",
        type=Path,
        default=os.environ.get("CURRENT_ACTIVITY_SDK_REGISTRY"),
        help="YAML/JSON SDK registry (default: $CURRENT_ACTIVITY_SDK_REGISTRY)",
    )
    parser.add_argument(
        "--adb_path",
        type=str,
        default=os.environ.get("CURRENT_ACTIVITY_ADB_PATH"),
        help="Path to adb binary; skips SDK lookup (default: $CURRENT_ACTIVITY_ADB_PATH)",
    )
    parser.add_argument(
        "--project_root",
        type=Path,
        default=None,
        help="Project directory searched for <Activity>.java / <Activity>.kt",
    )
    parser.add_argument("--json", action="store_true", help="Print a JSON report.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log adb output lines.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    adb_path = args.adb_path
    if not adb_path:
        try:
            sdk_root = args.sdk_root or resolve_sdk_root(args.sdk_registry)
        except (ConfigError, FileNotFoundError) as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return EXIT_NO_SDK
        if not sdk_root:
            log.warning("Could not find Android sdk path")
            print(f"WARNING: {UI_NO_SDK_MESSAGE}", file=sys.stderr)
            return EXIT_NO_SDK
        adb_path = resolve_bridge_path(sdk_root)

    resolver = ActivityResolver(adb_path)
    try:
        report = resolve_foreground_activities(resolver)
    except (ExecutionAdbError, ParseAdbError, NoDeviceAdbError) as e:
        if args.json:
            print(_json_dumps({"error": e.kind.value, "message": describe_failure(e)}))
        else:
            print(describe_failure(e))
        return EXIT_FAILED

    payload = report_to_dict(report, args.project_root)
    if args.json:
        print(_json_dumps(payload))
    else:
        for entry in payload["outcomes"]:
            for line in _format_entry(entry):
                print(line)
    return EXIT_OK if report.successes() else EXIT_FAILED


if __name__ == "__main__":
    raise SystemExit(main())
