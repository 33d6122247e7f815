"""Core geom types, errors and construction."""
