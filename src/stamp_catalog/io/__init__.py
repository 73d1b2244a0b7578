"""I/O layer: thin readers around the catalog core."""
