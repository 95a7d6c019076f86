"""A WSGI service that stores scoreboards in SQLite and serves them as JSON."""

__version__ = "0.1.0"