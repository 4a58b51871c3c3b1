"""Pure aggregation primitives: models, overlap, grouping, classification."""
