"""File loaders turning configuration artifacts into raw group mappings."""
