"""Infrastructure layer: logging and system collectors."""
