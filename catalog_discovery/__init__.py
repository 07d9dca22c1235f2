"""Catalog discovery service."""
