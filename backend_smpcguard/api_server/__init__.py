"""
API server: thin HTTP adapter over the scoring core for the presentation layer.
"""
