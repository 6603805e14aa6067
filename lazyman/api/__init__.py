"""HTTP API for catalog browsers."""
