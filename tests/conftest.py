import sys, os

# Ensure src is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from tests.helpers import CallbackRecorder, EventRecorder, drive_ticks, make_grid

__all__ = [
    "CallbackRecorder",
    "EventRecorder",
    "drive_ticks",
    "make_grid",
]
