"""Find the source file of an activity in a project tree."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List

log = logging.getLogger(__name__)

EXT_JAVA = ".java"
EXT_KOTLIN = ".kt"
SKIP_DIRS = frozenset({".git", ".gradle", ".idea", "build"})


def simple_class_name(activity: str) -> str:
    """`com.example.app.MainActivity` -> `MainActivity`."""

    dot = activity.rfind(".")
    if dot == -1:
        return activity
    return activity[dot + 1 :]


def find_files_by_name(project_root: Path, file_name: str) -> List[Path]:
    found: List[Path] = []
    for dirpath, dirnames, filenames in os.walk(project_root):
        dirnames[:] = sorted(d for d in dirnames if d not in SKIP_DIRS)
        if file_name in filenames:
            found.append(Path(dirpath) / file_name)
    return sorted(found)


def find_activity_sources(project_root: Path, activity: str) -> List[Path]:
    """Return the source files for `activity` (Java first, then Kotlin).

    All matches are returned; an empty list means neither file exists.
    """

    name = simple_class_name(activity)
    file_name_java = name + EXT_JAVA
    file_name_kotlin = name + EXT_KOTLIN

    found = find_files_by_name(project_root, file_name_java)
    if not found:
        log.info("No file with name %s found", file_name_java)
        found = find_files_by_name(project_root, file_name_kotlin)
        if not found:
            log.info("No file with name %s found", file_name_kotlin)
            return []
    if len(found) > 1:
        log.warning("Found more than one file with name %s or %s", file_name_java, file_name_kotlin)
    return found
