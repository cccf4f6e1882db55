"""CLI progress displays."""

from gram.cli.progress.rich import RichDiffProgress

__all__ = ["RichDiffProgress"]
