"""Top-level autowire commands."""
