"""Allow ``python -m bach_theory``."""

import sys

from bach_theory.cli import main

sys.exit(main())
