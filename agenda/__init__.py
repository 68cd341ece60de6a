"""Agenda backend: scheduled events and user accounts behind a CRUD API."""

__version__ = "0.1.0"
