"""CLI module for flynode."""
