"""API package - HTTP boundary: routes, dependencies and middleware."""
