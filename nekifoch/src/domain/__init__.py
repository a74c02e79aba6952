"""Domain layer: font models, errors and matching rules."""
