"""Keep a Markdown docs index table in sync with staged documentation files."""

__version__ = "0.1.0"
