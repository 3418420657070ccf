"""
CLI Commands - Individual command implementations.

This package contains the command implementations registered on the main
Typer application.
"""
