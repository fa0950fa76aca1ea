"""JAPAMA water-utility administration backend."""

__version__ = "1.0.0"
