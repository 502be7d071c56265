"""Image upload API gateway."""
