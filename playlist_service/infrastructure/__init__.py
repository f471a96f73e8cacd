"""Infrastructure adapters: persistence, HTTP API and CLI."""
