"""Build pass orchestration.

This module discovers candidate sources and runs a lifecycle over them.
It owns the worker pool and the per-pass staleness cache reset.
"""
