"""Inventory retrieval and per-item display attributes."""
