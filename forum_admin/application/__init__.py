"""Application layer: administrative use cases."""
