"""Presentation layer: command-line entry points."""
