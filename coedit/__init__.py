"""coedit - find developers who work on the same files."""
