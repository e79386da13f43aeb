"""Configuration layer: section models, settings sources, logging setup."""
