"""Push notification fan-out service."""
