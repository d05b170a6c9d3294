"""Core infrastructure: paths, settings, logging and theming."""
