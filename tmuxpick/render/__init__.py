"""ANSI rendering of picker lines and previews."""
