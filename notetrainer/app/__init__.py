"""Application layer: scoring session, event bus, tracing and CLI."""
