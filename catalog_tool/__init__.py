"""catalog-tool: validated book, movie, author and publisher registries."""

__version__ = "0.1.0"
