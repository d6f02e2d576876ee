"""Allow ``python -m cyclasar``."""

import sys

from cyclasar.cli import main

sys.exit(main())
