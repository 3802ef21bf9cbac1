"""Trading bounded context - normalized trades, system links, workflow events."""
