import os
import sys

CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
if CURRENT_DIR not in sys.path:
    sys.path.insert(0, CURRENT_DIR)

from crash_log import default_crash_log_dir, write_crash_log


if __name__ == "__main__":
    try:
        from main import main
        main()
    except Exception:
        # Qt may not be up yet, so the fixed per-platform path is used.
        write_crash_log(default_crash_log_dir(), "Startup crash", sys.exc_info())
        sys.exit(1)
