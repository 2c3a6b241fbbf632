"""Domain layer: entities, enums and pure rules with no I/O."""
