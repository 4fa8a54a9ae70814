"""Bundled Jinja2 templates for generated JavaScript sources."""
