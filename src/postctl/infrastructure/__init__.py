"""Infrastructure layer: filesystem access, templates, and the Blog repository."""
