"""Domain layer: entities, pure transforms, errors and repository contracts."""
