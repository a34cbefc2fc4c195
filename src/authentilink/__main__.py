"""Allow running as ``python -m authentilink``."""

import sys

from .cli import main

sys.exit(main())
