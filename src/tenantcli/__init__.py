"""Command-line client for tenant directory and site administration."""

from __future__ import annotations

__version__ = "0.1.0"
