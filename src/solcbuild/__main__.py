"""Allow ``python -m solcbuild``."""

import sys

from solcbuild.cli import main

if __name__ == "__main__":
    sys.exit(main())
