"""Allow ``python -m picture_toolkit``."""

import sys

from picture_toolkit.cli import main

sys.exit(main())
