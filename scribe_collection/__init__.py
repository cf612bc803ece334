"""scribe-collection: previews and embed widgets for public document collections."""

__version__ = "1.0.0"
