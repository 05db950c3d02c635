"""HTTP API for Stratizen Hub."""
