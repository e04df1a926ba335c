"""logic — Game systems package.

Subpackages
-----------
maze/       — procedural level generation (layouts, features, pipeline)
ai/         — policy registry, the six behaviours, smart mode, runner

Top-level modules
-----------------
tick            — per-tick pipeline (+ player movement system)
collection      — dot / pellet / bonus / teleporter / safe-zone effects
collisions      — player ↔ adversary contact
pathfinding     — cached A* navigation
upgrades        — between-level shop
input_manager   — raw input → intent mapping
"""
