"""HTTP API for specdeck documents."""
