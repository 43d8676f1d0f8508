"""Pygame drawing for the conveyor, bins, items and HUD."""
