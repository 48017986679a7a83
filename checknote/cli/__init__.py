"""Command line interface for checknote."""
