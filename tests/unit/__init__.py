"""
Unit Tests - Testing Individual Components in Isolation.

Each component is tested in isolation with stubbed dependencies.
Unit tests should be fast, deterministic, and focused.

Test Files:
    - test_cache_store.py: Store lookups, installs, stats
    - test_cached_source.py: Caching layer TTL and failure policy
    - test_logging_source.py: Call logging layer
    - test_config_loader.py: Configuration loading/validation
"""
