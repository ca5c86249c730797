"""Reporters — PR comment, terminal, JSON."""
