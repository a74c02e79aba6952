"""Nekifoch application source."""
