"""Live overtime earnings counter with statutory limit tracking."""

__version__ = "1.0.0"
