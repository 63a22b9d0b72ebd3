"""Gigboard HTTP API."""
