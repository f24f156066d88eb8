"""Version information for gtr."""

__version__ = "0.1.0"
