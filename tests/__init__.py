"""Geocoding test suite: shared fixtures and recorded-response tests."""
