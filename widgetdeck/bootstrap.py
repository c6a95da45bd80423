import sys

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QTimer

from widgetdeck.core.catalog import CatalogStore
from widgetdeck.core.disclosure import DisclosureController
from widgetdeck.core.paths import CACHE_DIR
from widgetdeck.core.viewer_config import load_config
from widgetdeck.engine.github_source import GithubWidgetSource
from widgetdeck.ui.main_window import WidgetDeckUI
from widgetdeck.ui.pages.catalog import PageCatalog


def main():
    app = QApplication(sys.argv)
    config = load_config()

    source = GithubWidgetSource(config, cache_dir=CACHE_DIR)
    disclosure = DisclosureController()
    store = CatalogStore(source, disclosure)

    page = PageCatalog(store, disclosure, config)
    ui = WidgetDeckUI(store, page, config)

    source.sig_trace.connect(ui.append_trace)
    store.sig_trace.connect(ui.append_trace)

    app.aboutToQuit.connect(source.shutdown)

    ui.show()
    # single fetch once the window is up
    QTimer.singleShot(0, store.load)
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
