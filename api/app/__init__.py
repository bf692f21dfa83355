"""GroupProof read-path API."""
