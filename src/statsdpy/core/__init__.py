"""Core metric encoding, sampling and session tracking."""
