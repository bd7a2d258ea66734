"""
alpacalink Test Suite

Test Organization:
    tests/
    ├── __init__.py          # This file
    ├── conftest.py          # Shared fixtures (simulator server, client)
    ├── fixtures/            # In-process Alpaca simulator
    └── unit/                # Unit tests (no external dependencies)

Running Tests:
    # Run all tests
    pytest tests/

Requirements:
    pip install -e ".[test]"
"""
