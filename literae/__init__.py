"""Literae bookstore API."""
