"""Greeting, date and SEO title tools served over a discovery/invocation HTTP API."""

__version__ = "1.0.0"
