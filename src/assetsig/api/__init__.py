"""HTTP API for the asset inventory."""
