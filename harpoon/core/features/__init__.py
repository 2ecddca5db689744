"""Slot features: scope resolution, slot editing, navigation, labels."""
