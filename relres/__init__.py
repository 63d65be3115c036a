"""relres: pick releases out of update-service release feeds."""

__version__ = "0.3.0"
