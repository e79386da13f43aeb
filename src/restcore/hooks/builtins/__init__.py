"""Plugins shipped with restcore."""
