"""Mutator presets that can be registered in any Channel."""
