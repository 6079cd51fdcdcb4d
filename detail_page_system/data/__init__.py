"""Sample product data."""
