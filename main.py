import logging

import config
from ui.main_window import MainWindow


def main():
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    MainWindow().run()


if __name__ == "__main__":
    main()
