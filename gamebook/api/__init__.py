"""HTTP API for game records."""
