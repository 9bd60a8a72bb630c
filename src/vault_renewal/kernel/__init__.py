"""Kernel – errors and timer primitives shared by every layer."""
