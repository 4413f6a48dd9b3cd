"""clipstash - a pastebin-style clip sharing service."""

__version__ = "0.1.0"
