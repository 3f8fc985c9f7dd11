"""Filesystem probing.

This module exposes non-raising existence and timestamp queries.
It is the only layer that stats, reads, and writes build files.
"""
