"""
HTTP API: webhook intake and read-only claim state.
"""
