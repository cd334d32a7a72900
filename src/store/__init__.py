"""Record storage layer.

This module persists codec-encoded values as one file per key.
It powers the preference map and plain JSON stores of the SDK.
"""
