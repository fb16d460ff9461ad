import os
import sys
import json
import logging
from dataclasses import dataclass, fields, replace
from typing import Optional

BUNDLE_ID = 'com.shiftcal.schedule'
CONFIG_FILENAME = 'shift_config.json'

DEFAULT_DURATION = 8


def get_workflow_data_dir() -> str:
    """Get Alfred workflow data directory"""
    data_dir = os.getenv('alfred_workflow_data')
    if not data_dir:
        data_dir = os.path.expanduser(f'~/Library/Application Support/Alfred/Workflow Data/{BUNDLE_ID}')
    return data_dir


def as_int(value, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def as_bool(value, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ('1', 'true', 'yes', 'on'):
            return True
        if lowered in ('0', 'false', 'no', 'off'):
            return False
    return default


@dataclass(frozen=True)
class Settings:
    """Values the schedule parser reads on every call"""

    default_duration: int = DEFAULT_DURATION    # hours, used when no end time is given
    assume_daytime: bool = True
    day_offset: int = 0
    testing_mode: bool = False

    @classmethod
    def from_dict(cls, config: dict) -> 'Settings':
        """Build settings from a config mapping, falling back to defaults for bad values"""
        defaults = cls()
        return cls(
            default_duration=as_int(config.get('default_duration'), defaults.default_duration),
            assume_daytime=as_bool(config.get('assume_daytime'), defaults.assume_daytime),
            day_offset=as_int(config.get('day_offset'), defaults.day_offset),
            testing_mode=as_bool(config.get('testing_mode'), defaults.testing_mode),
        )

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def load_settings(config_file: Optional[str] = None) -> Settings:
    """Load settings from the workflow data directory"""
    if config_file is None:
        config_file = os.path.join(get_workflow_data_dir(), CONFIG_FILENAME)

    try:
        with open(config_file, 'r') as f:
            config = json.load(f)
    except FileNotFoundError:
        return Settings()
    except (OSError, ValueError) as e:
        logging.getLogger(__name__).warning(f"Error loading config {config_file}: {e}")
        return Settings()

    if not isinstance(config, dict):
        logging.getLogger(__name__).warning(f"Ignoring config {config_file}: not a JSON object")
        return Settings()
    return Settings.from_dict(config)


def save_settings(settings: Settings, config_file: Optional[str] = None) -> str:
    """Write settings to the workflow data directory, returning the file path"""
    if config_file is None:
        data_dir = get_workflow_data_dir()
        os.makedirs(data_dir, exist_ok=True)
        config_file = os.path.join(data_dir, CONFIG_FILENAME)

    with open(config_file, 'w') as f:
        json.dump(settings.to_dict(), f, indent=2)
    return config_file


def get_testing_mode() -> bool:
    """Check if testing mode is enabled"""
    return load_settings().testing_mode


def update_setting(settings: Settings, key: str, value: str) -> Settings:
    """Return settings with one value changed, rejecting unknown keys and bad values"""
    if key not in {f.name for f in fields(settings)}:
        raise ValueError(f"Unknown setting: {key}")

    current = getattr(settings, key)

    if isinstance(current, bool):
        parsed = as_bool(value, None)
    else:
        parsed = as_int(value, None)
    if parsed is None:
        raise ValueError(f"Invalid value for {key}: {value!r}")
    return replace(settings, **{key: parsed})


def generate_items(settings: Settings) -> list:
    """Generate Alfred items showing the current settings"""
    return [{
        "title": f"{key}: {value}",
        "subtitle": f"Type '{key} <value>' to change",
        "valid": False,
        "icon": {"path": "icon.png"},
    } for key, value in settings.to_dict().items()]


def main():
    settings = load_settings()
    args = " ".join(sys.argv[1:]).split()

    if len(args) != 2:
        print(json.dumps({"items": generate_items(settings)}))
        return

    key, value = args
    try:
        settings = update_setting(settings, key, value)
        save_settings(settings)
    except (ValueError, OSError) as e:
        logging.getLogger(__name__).error(f"Failed to set {key}: {e}")
        print(json.dumps({
            "alfredworkflow": {
                "arg": f"Failed to set {key}: {e}",
                "variables": {
                    "error": "true",
                    "notificationTitle": "Error"
                }
            }
        }))
        return

    print(json.dumps({
        "alfredworkflow": {
            "arg": f"{key} = {getattr(settings, key)}",
            "variables": {
                key: str(getattr(settings, key)),
                "notificationTitle": "Setting Saved"
            }
        }
    }))


if __name__ == "__main__":
    main()
