"""restcore: request-dispatch core for small REST server shells."""

__version__ = "0.1.0"
