"""Branchwatch CLI — Typer-based command-line interface.

Provides the ``branchwatch`` command with subcommands for checking whether a
branch moved since the last successful build, resolving references against a
fresh anonymous clone, and previewing anonymous fetch URLs.

All output uses Rich for formatted terminal display.
"""
