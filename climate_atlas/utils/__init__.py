"""
Utility subpackage for Climate Atlas:
- config_loader   → YAML loader & overrides
- geospatial      → vertex iteration & label centroids
- logging_utils   → unified logger setup
- text_utils      → parenthetical / letter / whitespace helpers
"""
