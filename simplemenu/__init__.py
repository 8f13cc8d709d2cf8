"""Game launcher logic: surfaces and zooming, themes, stored menu data, list navigation and settings."""

__version__ = "0.1.0"