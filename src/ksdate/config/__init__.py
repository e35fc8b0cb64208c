"""Configuration — ksdate.toml discovery, settings, and logging setup."""
