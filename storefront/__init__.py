"""Storefront service layer: API client, public pages and the builder session."""
