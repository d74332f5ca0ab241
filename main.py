import argparse
import logging
import sys

from PyQt5.QtWidgets import QApplication

from gui.window import MainWindow
from src.algorithms.scheduler import BookingBoard
from src.config import load_settings
from src.utils.storage import JsonFileStore, MemoryStore

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def main():
    parser = argparse.ArgumentParser(description="Meeting hall booking board")
    parser.add_argument(
        "--no-persist", action="store_true", help="keep bookings in memory only"
    )
    args, qt_args = parser.parse_known_args()

    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    app = QApplication([sys.argv[0]] + qt_args)

    # Make all fonts a bit bigger
    font = app.font()
    font.setPointSize(font.pointSize() + 2)
    app.setFont(font)

    store = MemoryStore() if args.no_persist else JsonFileStore(settings.storage_path)
    board = BookingBoard(store)
    window = MainWindow(board, settings)
    window.show()

    sys.exit(app.exec_())

if __name__ == "__main__":
    main()
