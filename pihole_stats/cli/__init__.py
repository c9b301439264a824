"""
CLI Module.

Command-line front end built with Click, rendering with Rich.

Architecture:
- CLI is a thin presentation layer
- Fetching and toggling live in pihole_stats.services
- Logs go to stderr, reports to stdout
"""
