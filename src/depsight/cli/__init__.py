"""Command line interface for depsight."""
