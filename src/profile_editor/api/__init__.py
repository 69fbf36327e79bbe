"""HTTP API for the profile editor."""
