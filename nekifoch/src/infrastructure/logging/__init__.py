"""Logging setup for Nekifoch."""
