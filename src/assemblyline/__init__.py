"""Assembly Line — a conveyor sorting arcade game."""
