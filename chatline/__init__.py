"""chatline - real-time conversation service core."""

__version__ = "0.1.0"
