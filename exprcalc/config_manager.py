# config_manager.py
import os
import json
from pathlib import Path

from . import error as E

config_json = Path(__file__).resolve().parent / "config.json"

DEFAULT_SETTINGS = {
    "numeric_type": "float64",
    "identifiers_contain_numbers": True,
    "degree_mode": False,
    "max_depth": 64,
    "decimal_precision": 50,
    "max_factorial_argument": 1000,
}


def config_path():
    """Settings file in use; EXPRCALC_CONFIG overrides the bundled config.json."""
    override = os.environ.get("EXPRCALC_CONFIG")
    if override:
        return Path(override)
    return config_json


def _validate(settings_dict):
    for key, default in DEFAULT_SETTINGS.items():
        value = settings_dict[key]
        # bool is an int subclass, so compare the exact type
        if type(value) is not type(default):
            raise E.ConfigurationError(
                f"{E.ERROR_MESSAGES['5002']}{key}={value!r}", code="5002"
            )
        if isinstance(value, int) and not isinstance(value, bool) and value < 1:
            raise E.ConfigurationError(
                f"{E.ERROR_MESSAGES['5002']}{key}={value!r}", code="5002"
            )
    return settings_dict


def load_settings(path=None):
    """Read the settings file merged over DEFAULT_SETTINGS."""
    settings_dict = dict(DEFAULT_SETTINGS)
    try:
        with open(path or config_path(), 'r', encoding='utf-8') as f:
            stored = json.load(f)

    except (OSError, ValueError):
        # missing, unreadable or not valid UTF-8 JSON
        return settings_dict

    if isinstance(stored, dict):
        settings_dict.update(stored)
    return _validate(settings_dict)


def load_setting_value(key_value):
    settings_dict = load_settings()

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value)
