"""Application layer: type derivation, value conversion, reporting."""
