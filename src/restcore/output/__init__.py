"""Output layer: encodes response bodies in the negotiated format."""
