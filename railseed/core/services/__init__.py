"""Domain services: text operations, state probing, step building, recipe."""
