#!/usr/bin/env python
"""Main entry point for the Summons Tracker.

Runs the CLI, which provides the worklist, stats, agenda and transition
commands.
"""

from cli.main import main

if __name__ == "__main__":
    main()
