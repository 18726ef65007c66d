"""Service layer — plan building, plan caching, and instance checks.

Services may import from domain and infrastructure layers.
They must never import from config, except for the default cache wiring.
"""
