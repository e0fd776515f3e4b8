"""Core resolution engine: paths, composition, configuration and errors."""
