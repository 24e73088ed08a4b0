"""Domain rules for the message board (pure helpers, no I/O)."""
