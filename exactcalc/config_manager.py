# config_manager.py
import json
from pathlib import Path

config_json = Path(__file__).resolve().parent / "config.json"
ui_strings = Path(__file__).resolve().parent / "ui_strings.json"


# Used for every key that is missing from config.json, has the wrong type, or when the file is unreadable
DEFAULT_SETTINGS = {
    "decimal_separator": ".",
    "output_format": "decimal",
    "decimal_places": 20,
    "auto_close_brackets": False,
    "darkmode": False,
    "after_paste_enter": False,
    "show_equation": True,
}


def read_json(path):
    """Parsed JSON object from path, {} if the file is missing, broken or not an object."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            inhalt = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError):
        return {}
    return inhalt if isinstance(inhalt, dict) else {}


def same_type(value, default):
    # bool is an int subclass; keep checkboxes and number fields apart
    if isinstance(default, bool) or isinstance(value, bool):
        return isinstance(value, bool) and isinstance(default, bool)
    return isinstance(value, type(default))


def load_setting_value(key_value):
    stored = read_json(config_json)

    settings_dict = dict(DEFAULT_SETTINGS)
    for key, value in stored.items():
        if key not in DEFAULT_SETTINGS or same_type(value, DEFAULT_SETTINGS[key]):
            settings_dict[key] = value

    if key_value == "all":
        return settings_dict
    return settings_dict.get(key_value, 0)


def load_setting_description(key_value):
    descriptions = read_json(ui_strings)
    if key_value == "all":
        return descriptions
    return descriptions.get(key_value, 0)


def save_setting(settings_dict):
    try:
        with open(config_json, 'w', encoding='utf-8') as f:
            json.dump(settings_dict, f, indent=4)
    except (OSError, TypeError):
        return {}
    return settings_dict
