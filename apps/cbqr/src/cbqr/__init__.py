"""cbqr command-line application."""
