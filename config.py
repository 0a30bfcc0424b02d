# config.py
# Default parameters for the visualizer

import logging
import os

# === Best fit ===
DEFAULT_BLOCK_SIZES = [50, 100, 350, 500]   # preset memory blocks
MAX_BLOCK_SIZE = 100000
STRICT_FREE = False                          # raise on unknown / double free

# === Second chance ===
DEFAULT_FRAME_COUNT = 3
MAX_FRAME_COUNT = 16
DEFAULT_PAGE_SEQUENCE = "0, 4, 1, 4, 2, 4, 3, 4, 2, 4, 0, 4, 1, 4, 2, 4, 3, 4"
AUTOPLAY_SPEEDS_MS = [500, 1000, 1500, 2000]

# === Disk scheduling ===
DEFAULT_DISK_SIZE = 200
MAX_DISK_SIZE = 10000
DEFAULT_HEAD_POSITION = 50
DEFAULT_REQUEST_SEQUENCE = "98, 183, 37, 122, 14, 124, 65, 67"

# === Logging ===
LOG_LEVEL = os.environ.get("VISUALIZER_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level=None):
    """Configure the root logger once for the whole app."""
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
