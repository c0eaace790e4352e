"""CMS admin core: section store access, reorder coordination, app state."""

__version__ = "0.1.0"
