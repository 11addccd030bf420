"""HomeBase food tracking backend."""
