"""Domain layer: value objects, schema, and the error taxonomy. No I/O."""
