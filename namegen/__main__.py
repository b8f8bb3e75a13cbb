#!/usr/bin/env python3
"""Allow running as ``python -m namegen``."""

import sys

from namegen.cli import main

sys.exit(main())
