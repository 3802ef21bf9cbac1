"""Domain layer - entities, value objects, ports and parsing contracts."""
