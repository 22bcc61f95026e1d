"""Domain layer: models, services and repository interfaces."""
