"""ksdate — dynamic date strings for shortcode-driven content."""

__version__ = "1.0.0"
