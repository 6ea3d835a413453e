"""Command-line interface for schemaledger."""
