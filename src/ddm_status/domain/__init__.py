"""Domain layer: value objects and entities with no I/O."""
