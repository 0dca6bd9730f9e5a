"""Reversi with flat Monte-Carlo move selection."""
