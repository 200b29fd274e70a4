"""Adapters: in-memory helpers and SQLAlchemy connection support."""
