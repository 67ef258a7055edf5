"""Shared helpers: threshold defaults and locked file access."""
