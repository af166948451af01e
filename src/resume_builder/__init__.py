"""Resume builder backend: document model, versioning, sharing and export."""

__version__ = "0.1.0"
