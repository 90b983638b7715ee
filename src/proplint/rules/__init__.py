"""Lint rules and the component detection they build on."""
