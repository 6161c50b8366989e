"""Admin console client: status modal, session presence, date and logo helpers."""

__version__ = "0.1.0"
