"""Request handlers for User Service."""
