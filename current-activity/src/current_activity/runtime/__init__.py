"""Runtime helpers for current-activity."""
