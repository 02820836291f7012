"""Tribute site core — fixture queries and scroll-section navigation."""
