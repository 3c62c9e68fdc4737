"""HTML rendering of parsed blocks and whole lesson documents."""
