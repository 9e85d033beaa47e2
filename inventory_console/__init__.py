"""Inventory console: equipment, logs, users and assets behind a signed-in web console."""

__version__ = "0.1.0"
