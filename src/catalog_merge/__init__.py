"""catalog_merge package."""
