"""Tests replaying recorded provider responses through the Geocoder facade."""
