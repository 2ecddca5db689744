"""Harpoon core: persistence, features and the slot service."""
