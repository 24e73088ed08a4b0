"""
High-level use cases for the Chatboard API.

Routers (FastAPI endpoints) call these services instead of manipulating the
JSON data file directly.
"""
