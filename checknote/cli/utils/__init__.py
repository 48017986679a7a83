"""Shared helpers for the checknote CLI."""
