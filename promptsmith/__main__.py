"""Entry point for ``python -m promptsmith``."""

import sys

from promptsmith.cli import main

sys.exit(main())
