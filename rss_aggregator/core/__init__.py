"""Feed aggregation pipeline: fetch, normalize, match, merge."""
