"""SDK registry loading.

An SDK registry is a small YAML/JSON file listing installed SDKs:

  sdks:
    - name: Android API 34
      type: Android SDK
      home: /opt/android-sdk
    - name: JDK 17
      type: JavaSDK
      home: /usr/lib/jvm/java-17

The first entry whose type is exactly "Android SDK" wins. Without a registry
the standard ANDROID_SDK_ROOT / ANDROID_HOME variables are consulted.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from jsonschema import Draft202012Validator

log = logging.getLogger(__name__)

ANDROID_SDK_TYPE_NAME = "Android SDK"
SDK_ROOT_ENV_VARS = ("ANDROID_SDK_ROOT", "ANDROID_HOME")

SDK_REGISTRY_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["sdks"],
    "properties": {
        "sdks": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["type", "home"],
                "properties": {
                    "name": {"type": "string"},
                    "type": {"type": "string", "minLength": 1},
                    "home": {"type": "string", "minLength": 1},
                },
            },
        }
    },
}


class ConfigError(RuntimeError):
    pass


def load_yaml_or_json(path: Path) -> Dict[str, Any]:
    """Load a YAML/JSON file into a dict.

    This is intentionally strict: the top-level must be an object.
    """
    if not path.exists():
        raise FileNotFoundError(path)

    if path.suffix.lower() in {".yaml", ".yml"}:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    elif path.suffix.lower() == ".json":
        data = json.loads(path.read_text(encoding="utf-8"))
    else:
        raise ConfigError(f"Unsupported config file extension: {path}")

    if not isinstance(data, dict):
        raise ConfigError(f"Top-level config must be an object: {path}")
    return data


def validate_sdk_registry(instance: Mapping[str, Any], *, where: str) -> None:
    validator = Draft202012Validator(SDK_REGISTRY_SCHEMA)
    errors = sorted(validator.iter_errors(instance), key=lambda e: list(e.path))
    if errors:
        msgs = []
        for e in errors[:20]:
            loc = "/".join([str(p) for p in e.path])
            msgs.append(f"- {where}:{loc}: {e.message}")
        if len(errors) > 20:
            msgs.append(f"... ({len(errors)-20} more)")
        raise ConfigError("\n".join(msgs))


def load_sdk_registry(path: Path) -> List[Dict[str, Any]]:
    data = load_yaml_or_json(path)
    validate_sdk_registry(data, where=str(path))
    return list(data["sdks"])


def find_android_sdk_home(sdks: Sequence[Mapping[str, Any]]) -> Optional[str]:
    for sdk in sdks:
        sdk_type = sdk.get("type")
        log.debug("sdk type=%r home=%r", sdk_type, sdk.get("home"))
        if sdk_type == ANDROID_SDK_TYPE_NAME:
            return str(sdk["home"])
    return None


def resolve_sdk_root(
    registry_path: Optional[Path] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    """Return the Android SDK root, or None when it is not configured.

    Precedence: registry file, then $ANDROID_SDK_ROOT, then $ANDROID_HOME.
    """

    if registry_path is not None:
        home = find_android_sdk_home(load_sdk_registry(registry_path))
        if home:
            return home
        log.info("no %r entry in %s", ANDROID_SDK_TYPE_NAME, registry_path)

    env = os.environ if environ is None else environ
    for var in SDK_ROOT_ENV_VARS:
        value = (env.get(var) or "").strip()
        if value:
            log.debug("sdk root from $%s", var)
            return value
    return None
