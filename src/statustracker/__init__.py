"""GitHub Status Tracker - tracks issues and pull requests with live status."""

__version__ = "0.1.0"
