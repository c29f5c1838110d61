import copy
import json
import os
from ticky.common.logger import log
from ticky.common.setup import PATHS, ensure_directory
from ticky.util.misc import now_iso, split_csv


_SCHEMA_VERSION = 1

#region === Helpers and Paths ===

SETTINGS_PATH = PATHS.data / "settings.json"

# Environment override for the enabled clock features, e.g. TICKY_CLOCK_FEATURES="hifitime,stdtime"
CLOCK_FEATURES_ENV = "TICKY_CLOCK_FEATURES"

# Default values for the settings section of the settings document.
_SETTINGS_DEFAULTS = {
    "clock_features": ["stdtime"],
    "log_level": "INFO",
    "console_log": False,
    "persistent_log": False,
    "refresh_interval_ms": 50,
    "always_on_top": True,
}

# Type each setting must have to be accepted from disk. bool is checked exactly, since it's an int subclass.
_SETTINGS_TYPES = {
    "clock_features": list,
    "log_level": str,
    "console_log": bool,
    "persistent_log": bool,
    "refresh_interval_ms": int,
    "always_on_top": bool,
}

def _valid_setting(key, value):
    expected = _SETTINGS_TYPES[key]
    if expected is bool:
        return isinstance(value, bool)
    if expected is int:
        return isinstance(value, int) and not isinstance(value, bool) and value > 0
    if expected is list:
        return isinstance(value, list) and all(isinstance(v, str) for v in value)
    return isinstance(value, expected)

# Helper to return a truly fresh, default settings document.
def build_default_settings():
    return {
        "meta": {
            "schema_version": _SCHEMA_VERSION,
            "saved_at": now_iso(),
        },
        "settings": copy.deepcopy(_SETTINGS_DEFAULTS),
    }

# Applies environment overrides on top of loaded settings.
def _apply_env_overrides(settings):
    features = os.getenv(CLOCK_FEATURES_ENV)
    if features is not None:
        settings["clock_features"] = split_csv(features)
        log.debug(f"Clock features overridden from {CLOCK_FEATURES_ENV}: {settings['clock_features']}")
    return settings

#endregion === Helpers and Paths ===

#region === Saving and Loading Settings ===

# Loads the settings dict from SETTINGS_PATH, validating every key and falling back to defaults for anything missing
# or malformed. Never raises; a stopwatch should still work with a broken settings file.
def load_settings():
    try:
        if not SETTINGS_PATH.exists():
            document = build_default_settings()
            log.info(f"No existing settings found at '{SETTINGS_PATH}', using defaults.")
        else:
            with open(SETTINGS_PATH, "r", encoding="utf-8") as f:
                document = json.load(f)
            if not isinstance(document, dict):
                raise TypeError(f"Expected a JSON object in '{SETTINGS_PATH}', got {type(document).__name__}")
            defaulted_values = set()

            # Validate the meta dict
            if "meta" not in document or not isinstance(document["meta"], dict):
                defaulted_values.add("meta")
                document["meta"] = {}
            if "schema_version" not in document["meta"] or not isinstance(document["meta"]["schema_version"], int):
                defaulted_values.add("meta.schema_version")
                document["meta"]["schema_version"] = _SCHEMA_VERSION

            # Validate the settings dict, fill in any necessary defaults
            if "settings" not in document or not isinstance(document["settings"], dict):
                defaulted_values.add("settings")
                document["settings"] = copy.deepcopy(_SETTINGS_DEFAULTS)
            else:
                for key, default in _SETTINGS_DEFAULTS.items():
                    if key not in document["settings"] or not _valid_setting(key, document["settings"][key]):
                        defaulted_values.add(f"settings.{key}")
                        document["settings"][key] = copy.deepcopy(default)

            # Log results
            if defaulted_values:
                log.warning(f"Loaded settings from '{SETTINGS_PATH}', but with missing or invalid values that were defaulted: {', '.join(sorted(defaulted_values))}")
            else:
                log.info(f"Successfully loaded settings from '{SETTINGS_PATH}'.")
        return _apply_env_overrides(document["settings"])
    # Fall back to fresh settings in case of error, but warn in log
    except (ValueError, OSError, TypeError):
        log.warning(f"Ran into an error while trying to load '{SETTINGS_PATH}', falling back to default settings.", exc_info=True)
        return _apply_env_overrides(build_default_settings()["settings"])

# Write the given settings dict to disk under SETTINGS_PATH, returning the document that was written.
def save_settings(settings):
    document = {
        "meta": {
            "schema_version": _SCHEMA_VERSION,
            "saved_at": now_iso(),
        },
        "settings": dict(settings),
    }
    ensure_directory(SETTINGS_PATH.parent)
    with open(SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(document, f, indent=2)
    log.info(f"Successfully saved settings to '{SETTINGS_PATH}'")
    return document

#endregion === Saving and Loading Settings ===
