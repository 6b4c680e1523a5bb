"""
Test Suite for Line Service.

Test organization:
    - unit/: Unit tests for individual components
    - integration/: Composed pipelines and concurrent access
    - fixtures/: Shared test fixtures and sample data

Running Tests:
    pytest tests/                           # All tests
    pytest tests/unit/                      # Unit tests only
    pytest tests/integration/               # Integration tests only
    pytest --cov=src/line_service           # With coverage
"""
