"""End-to-end test harness for the restaurant point-of-sale REST API."""

__version__ = "0.1.0"
