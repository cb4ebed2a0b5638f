"""Test fixture package for area-geocoder.

Contains fixtures for:
- Boundary GeoJSON files
- FastAPI applications and clients
"""
