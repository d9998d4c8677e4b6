"""nas-tools: maintenance utilities for a home NAS music library."""

__version__ = "0.1.0"
