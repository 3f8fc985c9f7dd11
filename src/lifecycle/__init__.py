"""Build descriptor lifecycles.

This module decides whether a file must be rebuilt and in which form
its content is handed to the next compile stage.
"""
