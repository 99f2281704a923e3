"""
PropGraph - Property Graph Browser Backend

This package implements a FastAPI-based backend service over a labeled
property graph stored in Neo4j:
- Nodes carry labels and key/value properties
- Search ranks nodes against free text with a multi-factor heuristic
- Label browsing lists the categories present in the graph

The search engine is the only part with real algorithmic content:
filter building, per-record match scoring, stable ranking and
response sanitizing.
"""

__version__ = "1.0.0"
__author__ = "PropGraph Team"
