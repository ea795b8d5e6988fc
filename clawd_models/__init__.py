__version__ = "2026.2.1"
