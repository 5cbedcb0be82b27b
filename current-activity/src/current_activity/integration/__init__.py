"""Project-side integration (mapping an activity back to its source)."""
