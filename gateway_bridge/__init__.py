"""Discord Gateway to HTTP event bridge."""

__version__ = "0.1.0"
