"""Business services for authentication and contacts."""
