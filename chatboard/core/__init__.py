"""
Core utilities shared across the Chatboard API.

This package hosts configuration helpers (env vars, storage path), logging
setup and small request helpers. Routers/services depend on these primitives
instead of reading os.environ directly.
"""
