"""Core configuration, errors, paths, and shared types."""
