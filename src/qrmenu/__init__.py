"""QR table menu and ordering API."""

__version__ = "0.1.0"
