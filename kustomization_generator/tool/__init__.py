"""Command line tool for kustomization-generator."""
