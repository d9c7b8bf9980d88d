"""Command line interface."""

from omarchy_theme_maker.cli.app import create_app
from omarchy_theme_maker.cli.main import main

__all__ = ["create_app", "main"]
