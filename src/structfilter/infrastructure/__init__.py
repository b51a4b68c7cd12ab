"""Infrastructure layer: rule functions, rule boundary, shape introspection."""
