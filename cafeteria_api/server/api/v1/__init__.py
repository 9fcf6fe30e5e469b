"""Version 1 REST endpoints."""
