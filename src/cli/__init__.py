"""Kiln command line interface."""
