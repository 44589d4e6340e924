"""Post-resolution policy checks."""
