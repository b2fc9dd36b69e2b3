"""Domain services: naming heuristics, analytics, identity and storage."""
