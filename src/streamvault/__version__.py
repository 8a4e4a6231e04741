"""Version information for streamvault."""

__version__ = "0.1.0"
