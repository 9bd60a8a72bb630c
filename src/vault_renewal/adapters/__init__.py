"""Adapters – concrete secret-store integrations."""
