"""Cross-cutting infrastructure: logging, settings and the event bus."""
