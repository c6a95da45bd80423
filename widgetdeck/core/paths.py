import os
from pathlib import Path


if "WIDGETDECK_ROOT" in os.environ:
    WIDGETDECK_ROOT = Path(os.environ["WIDGETDECK_ROOT"]).expanduser()
elif os.name == "nt":
    appdata = os.getenv("APPDATA")
    if appdata:
        WIDGETDECK_ROOT = Path(appdata) / "WidgetDeck"
    else:
        WIDGETDECK_ROOT = Path.home() / "AppData" / "Roaming" / "WidgetDeck"
else:
    WIDGETDECK_ROOT = Path.home() / ".widgetdeck"

CONFIG_DIR = WIDGETDECK_ROOT / "config"
CACHE_DIR = WIDGETDECK_ROOT / "cache"

for _dir in (WIDGETDECK_ROOT, CONFIG_DIR, CACHE_DIR):
    _dir.mkdir(parents=True, exist_ok=True)
