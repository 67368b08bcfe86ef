#!/usr/bin/env python3
"""
Entry point for the HorseVPN launcher.

This module provides the CLI entry point when run as a Python package
(`python -m horsevpn`).
"""

import sys

from horsevpn.cli import main

if __name__ == "__main__":
    sys.exit(main())
