"""Shared helpers for paths, strings and editor positions."""
