"""
Pantry chef core: recipe extraction from cooking videos, ingredient line
parsing, and inventory matching.
"""
