"""Concrete adapters for the ragdocs provider interfaces."""
