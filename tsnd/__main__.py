"""Allow ``python -m tsnd``."""

import sys

from .cli import main

main(sys.argv[1:])
