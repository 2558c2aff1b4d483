"""Interface adapters exposing the engine to callers."""
