"""Allow ``python -m nickcollide``."""

import sys

from nickcollide.cli import main

sys.exit(main())
