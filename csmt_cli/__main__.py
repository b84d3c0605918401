"""
Module execution entry point.

Allows running with: python -m csmt_cli
"""

import sys
from csmt_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
