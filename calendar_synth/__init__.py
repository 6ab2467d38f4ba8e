"""Deterministic in-game calendar, weather and farming contest data."""
