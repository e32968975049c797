"""Spork CLI — Typer-based command-line interface.

Provides the ``spork`` command with the ``promote`` subcommand.  All
output uses Rich for formatted terminal display.
"""
