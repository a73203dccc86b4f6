"""Configuration entities with JSON serialization, an HTTP back end and small utilities."""

__version__ = "0.1.0"