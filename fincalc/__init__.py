"""Financial calculation engines with a thin Flask JSON API."""

__version__ = "0.1.0"
