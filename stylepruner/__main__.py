"""Main entry point when executing stylepruner as a package.

This allows running the package using python -m stylepruner.
"""

from stylepruner.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()
