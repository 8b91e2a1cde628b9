"""CLI commands for registered attributes."""

from . import inspect, config_cmd

__all__ = ["inspect", "config_cmd"]
