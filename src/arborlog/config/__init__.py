"""Configuration parsing: dictionary keys, file sources and the loader."""
