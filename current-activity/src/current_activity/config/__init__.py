"""Configuration: where the Android SDK (and therefore adb) lives."""

from current_activity.config.sdk_registry import (
    ANDROID_SDK_TYPE_NAME,
    ConfigError,
    find_android_sdk_home,
    load_sdk_registry,
    load_yaml_or_json,
    resolve_sdk_root,
)

__all__ = [
    "ANDROID_SDK_TYPE_NAME",
    "ConfigError",
    "find_android_sdk_home",
    "load_sdk_registry",
    "load_yaml_or_json",
    "resolve_sdk_root",
]
