"""Application layer: orchestration of domain operations over the store."""
