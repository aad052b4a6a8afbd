"""Garden domain layer: models, engines and collaborator contracts."""
