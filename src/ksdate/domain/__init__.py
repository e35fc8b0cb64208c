"""Domain layer — offset parsing, date differences, shortcode syntax.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
