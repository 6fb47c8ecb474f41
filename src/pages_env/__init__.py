"""Sync Cloudflare Pages environment variables with local files."""

__version__ = "0.1.0"
