"""
pytest configuration and fixtures for Quote Server tests
"""

import pytest
import random
import tempfile
import shutil
from pathlib import Path
import sys

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from homepage import QuoteStore, PageRenderer


TEST_TEMPLATE = """<!DOCTYPE html>
<html>
<head><title>Quotes</title></head>
<body>
<p id="quote"></p>
<p id="host"></p>
</body>
</html>
"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def sample_quotes():
    """Sample quote list"""
    return [
        "Simplicity is prerequisite for reliability.",
        "Talk is cheap. Show me the code.",
        "Make it work, make it right, make it fast.",
    ]


@pytest.fixture
def quotes_file(temp_dir, sample_quotes):
    """Quote resource file with a blank line in the middle"""
    path = temp_dir / "quotes.txt"
    lines = sample_quotes[:1] + [""] + sample_quotes[1:]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def template_file(temp_dir):
    """HTML template with both insertion points"""
    path = temp_dir / "index.html"
    path.write_text(TEST_TEMPLATE, encoding="utf-8")
    return path


@pytest.fixture
def quote_store(sample_quotes):
    """Quote store with a seeded generator"""
    return QuoteStore(sample_quotes, rng=random.Random(42))


@pytest.fixture
def fixed_hostname():
    """Hostname resolver returning a constant"""
    return lambda: "test-host-01"


@pytest.fixture
def page_renderer(template_file, fixed_hostname):
    """Renderer over the test template"""
    return PageRenderer(template_file, hostname_resolver=fixed_hostname)


# Pytest configuration
def pytest_configure(config):
    """Configure pytest"""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )
