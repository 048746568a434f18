"""Navigation site backend: admin auth plus project and category storage."""

__version__ = "0.1.0"
