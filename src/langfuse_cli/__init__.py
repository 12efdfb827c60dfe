"""Command-line client for the Langfuse observability API."""

__version__ = "0.3.0"
