"""Entry point for ``python -m src.supamarker``."""

import sys

from .cli import main

sys.exit(main())
