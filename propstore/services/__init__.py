"""Collaborators: properties text format, JSON codec, file creation."""
