"""Parsing use cases - the inbound message orchestrator and its read model."""
