#!/usr/bin/env python3
"""
terraform-hybrid - Main entry point.

Runs the command line interface.
"""

import sys

from tfhybrid.cli import main


if __name__ == "__main__":
    sys.exit(main())
