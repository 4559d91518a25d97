"""ghpm - a package manager for source repositories hosted on GitHub."""

__version__ = "0.1.0"
