"""Domain layer: relay, guard, settings and the error taxonomy."""
