"""Domain layer: field descriptors, tags, configuration and errors."""
