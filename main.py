import logging
import sys

from pathgrid.app import App
from pathgrid.config import LOG_LEVEL


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    App().run()
    sys.exit()


if __name__ == "__main__":
    main()
