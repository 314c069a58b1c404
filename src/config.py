import os
import json
import logging

logger = logging.getLogger(__name__)

_SETTINGS_PATH = os.environ.get(
    'ALBUMPLAYER_SETTINGS',
    os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'config', 'settings.json'),
)


def _load_settings(path: str = None):
    try:
        with open(path or _SETTINGS_PATH) as f:
            settings = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError):
        return {}
    return settings if isinstance(settings, dict) else {}


# modes applied when an album loads
SHUFFLE_ON_LOAD = False
REPEAT_ON_LOAD = False

# prev restarts the current track once it has played this long
PREV_RESTART_SECONDS = 2.0

# restricted (not owned) tracks stop after this much playback
PREVIEW_DURATION_SECONDS = 60.0

LOG_LEVEL = 'INFO'
LOG_FILE = None


def apply_settings(settings: dict) -> None:
    """Override module defaults with matching upper-cased keys."""
    for key, val in settings.items():
        upper = key.upper()
        if upper in globals() and not upper.startswith('_'):
            globals()[upper] = val
            logger.debug(f"config: {upper} = {val} (from settings.json)")


# override defaults from config/settings.json
apply_settings(_load_settings())
