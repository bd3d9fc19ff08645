"""
Public API catalog: listings, categories, usage stats and endpoints.
"""
