"""marklink - link project marker folders into workspace roots."""

__version__ = "0.1.0"
