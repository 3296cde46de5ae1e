"""Journal HTTP API."""
