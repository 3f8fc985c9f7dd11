"""Staleness bookkeeping.

This module caches include modification times within one build pass.
It also deduplicates errors shown to the user during that pass.
"""
