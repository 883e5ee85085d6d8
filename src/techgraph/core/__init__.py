"""
Graph-relationship engine: edge derivation, degree counting, neighborhood
expansion and connector geometry.
"""
