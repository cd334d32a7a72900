"""Key to filesystem path resolution.

This module turns caller keys into safe relative segments and
resolves the per-user base directory records are stored under.
"""
