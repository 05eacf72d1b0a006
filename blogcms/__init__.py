"""blogcms: blog post management service and content client."""

__version__ = "1.0.0"
