"""Renderers for CLI output."""
