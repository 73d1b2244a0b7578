"""Allow ``python -m stamp_catalog``."""

import sys

from stamp_catalog.cli.__main__ import main

if __name__ == "__main__":
    sys.exit(main())
