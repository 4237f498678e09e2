"""Evaluate files of expressions in a single session."""
