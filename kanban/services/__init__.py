"""Domain services; each mutating call runs in its own transaction."""
