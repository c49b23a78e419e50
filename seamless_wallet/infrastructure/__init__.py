"""Infrastructure adapters: database and upstream aggregator."""
