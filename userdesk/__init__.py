"""Userdesk: user registration, authentication and role-gated user administration API."""

__version__ = "0.1.0"
