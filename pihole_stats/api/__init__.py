"""Pi-hole API access: HTTP client and response models."""
