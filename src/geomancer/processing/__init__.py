"""Collaborators the pipeline consumes: aesthetic resolution and munching."""
