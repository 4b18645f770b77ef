"""
ManaForge.

Deck generation and format-constrained normalization for Magic: The Gathering.
"""
