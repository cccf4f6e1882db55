"""Desired settings loading."""

from gram.settings.loader import SettingsLoader, load_desired, parse_desired

__all__ = ["SettingsLoader", "load_desired", "parse_desired"]
