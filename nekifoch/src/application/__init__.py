"""Application services for Nekifoch."""
