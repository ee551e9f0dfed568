"""Main module for running schedule engine."""

import sys

from schedule_engine.cli import main

if __name__ == "__main__":
    sys.exit(main())
