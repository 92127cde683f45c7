"""Watch a chain for newly deployed contracts matching simple risk heuristics."""
