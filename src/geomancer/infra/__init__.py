"""Infrastructure: logging and settings."""
