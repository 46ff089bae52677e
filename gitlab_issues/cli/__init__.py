"""Terminal commands: list, update and create."""
