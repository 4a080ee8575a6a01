"""Postboard: token-authenticated posts and user management API."""
