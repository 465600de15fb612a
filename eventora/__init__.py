"""Eventora booking client."""
