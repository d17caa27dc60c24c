"""
Trait normalization layer.

Submodules:
  strategies  — per-collection extraction functions + built-in registry order
  normalizer  — TraitNormalizer (ordered substring dispatch) + normalize_traits()
"""
