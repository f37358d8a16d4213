"""
Package entry point.

Allows running the application via:

    python -m gridcal M1

This simply forwards execution to gridcal.cli.main().
"""

from gridcal.cli import main

if __name__ == "__main__":
    main()
