"""Infrastructure layer: persistence, web API, storage and outbound HTTP."""
