"""
Services.

Operations built on the API client: the combined summary snapshot and
the enable/disable toggle.
"""
