"""Interception hook adapters."""
