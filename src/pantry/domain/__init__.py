"""Domain layer: entities and services independent of infrastructure."""
