"""
Package entry point.

Allows running the application via:

    python -m sectionsearch

This simply forwards execution to sectionsearch.cli.main().
"""

from sectionsearch.cli import main

if __name__ == "__main__":
    main()
