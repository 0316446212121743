"""Rundeck remote option provider for Maven-format artifact repositories."""

__version__ = "1.0.0"
