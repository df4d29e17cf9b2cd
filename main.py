#!/usr/bin/env python3
"""CLI entry point for the brag log (same as the ``brag`` console script)."""

from brag_log.cli import main

if __name__ == "__main__":
    main()
