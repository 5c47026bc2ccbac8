"""Apartment, tenant-account and parking management for a small residential building."""

__version__ = "1.0.0"
