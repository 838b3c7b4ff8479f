"""CATAIT backend: feature card lookup and reset-token validation."""

__version__ = "0.1.0"
