"""
Root conftest.py for the financial service repository.

Puts each service directory on sys.path so its 'app' package can be
imported when pytest is run from the repository root.
"""

import sys
from pathlib import Path


def pytest_configure(config):
    """Add every directory under services/ that holds an 'app' package."""
    services_dir = Path(__file__).parent / "services"

    for service_path in sorted(services_dir.iterdir()):
        if (service_path / "app" / "__init__.py").exists() and str(service_path) not in sys.path:
            sys.path.insert(0, str(service_path))
