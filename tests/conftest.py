"""
Pytest configuration and shared fixtures
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture
def pet_columns():
    """Columns used by the documented examples"""
    return ['pets', 'colors']


@pytest.fixture
def normalize_ws():
    """Strip all whitespace so layout differences don't matter"""
    def _normalize(sql):
        return ''.join(sql.split())
    return _normalize


# Configure pytest
def pytest_configure(config):
    """Pytest configuration"""
    config.addinivalue_line(
        "markers", "integration: marks tests that execute generated SQL against SQLite"
    )
