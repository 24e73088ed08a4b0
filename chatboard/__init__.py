"""Chatboard: a message-board HTTP API persisted in a single JSON file."""
