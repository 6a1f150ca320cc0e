"""Domain layer: models, schemas, interfaces and services."""
