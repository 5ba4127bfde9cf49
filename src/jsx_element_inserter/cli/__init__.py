"""Command-line interface for JSX Element Inserter.

Provides the ``jsx-insert`` tool, which inserts an element into a JSX file
from the command line.
"""

from .main import main

__all__ = ["main"]
