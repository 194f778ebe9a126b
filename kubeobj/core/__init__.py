"""Configuration, errors, logging helpers and shared schema."""
