"""Scout explains what a directory holds and which files matter most."""

__version__ = "0.1.0"
