"""
Vibepoint - mood tracking core with HTTP API.

This package maps mood coordinates to display colors, rate-limits rapid
entry logging, and provides full data export and deletion.
"""

__version__ = "0.1.0"
