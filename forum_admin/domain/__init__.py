"""Domain layer: entities, vocabularies, errors and the repository port."""
