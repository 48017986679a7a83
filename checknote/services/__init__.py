"""Checklist and note services."""

from .editor import ChecklistEditor

__all__ = ["ChecklistEditor"]
