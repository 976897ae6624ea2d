"""HTTP API for the Vincy fare calculator."""
