"""CLI entry point: python -m kmplibs"""

import sys

from kmplibs.cli import main

sys.exit(main())
