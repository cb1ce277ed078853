"""Flask CLI command groups for the Plugin Recovery Manager."""
