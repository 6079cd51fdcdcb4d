"""HTTP API for the detail page system."""
