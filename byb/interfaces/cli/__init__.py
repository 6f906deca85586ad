"""Command line interface for the focus timer and the push dispatcher."""
