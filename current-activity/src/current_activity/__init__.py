"""current-activity.

Finds the Android Activity currently in the foreground on a connected
device/emulator by asking adb, and points at the matching source file.

Layers:
- runtime.android: adb path resolution, adb output parsing, retry per device
- config: SDK registry / environment lookup
- integration: project source lookup
- cli: command-line host
"""

__all__ = [
    "cli",
    "config",
    "integration",
    "runtime",
]
