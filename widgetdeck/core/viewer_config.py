import json
from pathlib import Path

DEFAULT_SOURCE_URL = "https://api.github.com/repos/zxbc/BAR_widgets/git/trees/main?recursive=1"

DEFAULT_CONFIG = {
    "source_url": DEFAULT_SOURCE_URL,
    "user_agent": "BAR Widget Manager",
    "request_timeout": 15.0,
    "use_response_cache": True,
    "language": "lua",
    "code_max_height": 384,
    "window_width": 900,
    "window_height": 700,
}


def config_path() -> Path:
    from widgetdeck.core.paths import CONFIG_DIR

    return CONFIG_DIR / "viewer_config.json"


def _coerce(key, value):
    default = DEFAULT_CONFIG[key]
    if isinstance(default, bool):
        return value if isinstance(value, bool) else default
    if isinstance(default, int):
        return value if isinstance(value, int) and not isinstance(value, bool) and value > 0 else default
    if isinstance(default, float):
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
            return float(value)
        return default
    if isinstance(default, str):
        return value if isinstance(value, str) and value.strip() else default
    return value


def load_config(path=None):
    config = DEFAULT_CONFIG.copy()
    path = Path(path) if path is not None else config_path()
    if path.exists():
        try:
            with path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
                if isinstance(data, dict):
                    config.update({k: v for k, v in data.items() if k in DEFAULT_CONFIG})
        except (OSError, ValueError):
            pass
    for key in DEFAULT_CONFIG:
        config[key] = _coerce(key, config[key])
    return config
