"""Job board REST service."""
