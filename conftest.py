"""
Root-level conftest for pytest configuration
"""
import logging


def pytest_configure(config):
    """Configure pytest"""
    config.addinivalue_line("markers", "asyncio: run the test in an event loop")

    # Set log format for pytest
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
