"""Command line scripts for generating clients."""
