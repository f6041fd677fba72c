"""HTTP API for the niche competitor finder."""
