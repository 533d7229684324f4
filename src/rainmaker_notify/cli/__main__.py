"""
Allow running rmnotify as a module: python -m rainmaker_notify.cli
"""

import sys
from .rmnotify import main

if __name__ == "__main__":
    sys.exit(main())
