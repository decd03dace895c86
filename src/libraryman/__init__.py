"""LibraryMan backend: member accounts and newsletter REST API."""

__version__ = "1.0.0"
