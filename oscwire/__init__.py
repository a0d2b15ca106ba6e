"""Open Sound Control messages, bundles, blobs, validation and pattern matching."""

__version__ = "0.1.0"
__all__ = ["blob", "bundle", "message", "method", "pattern", "types"]