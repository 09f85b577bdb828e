"""Kernel – errors, result type and clock shared by every layer."""
