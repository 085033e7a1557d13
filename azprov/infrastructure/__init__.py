"""Infrastructure layer: exceptions and registries shared by providers."""
