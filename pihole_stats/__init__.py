"""
pihole-stats.

Command-line client for the Pi-hole monitoring API: summary statistics,
status, and enable/disable.
"""

__version__ = "0.3.0"
