"""Core business logic: annotation assembly, sessions and anchors."""
