"""Include and import dependency resolution.

This module finds the files a template or stylesheet pulls in.
Dialect strategies plug into one shared traversal engine.
"""
