"""Voxgraph command line interface."""
