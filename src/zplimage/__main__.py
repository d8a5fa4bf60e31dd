"""Entry point for running zplimage as a module."""

import sys

from zplimage.cli.convert import main

if __name__ == "__main__":
    sys.exit(main())
