"""
Traversal tools for findpath.

This module contains the path normalizer, the existence checks and the
upward and downward walkers built on top of them.
"""
