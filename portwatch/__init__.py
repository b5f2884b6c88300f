"""Detect TCP ports that open or close on monitored hosts between scans."""

__version__ = "0.1.0"