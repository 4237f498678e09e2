"""Tokens, operators, expression trees, parser and shared utilities."""
