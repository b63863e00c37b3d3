"""
Pytest configuration.

Adds --stress flag for running concurrency tests with more threads.
"""

import pytest


def pytest_addoption(parser):
    """Add custom command line options"""
    parser.addoption(
        "--stress",
        action="store_true",
        default=False,
        help="Run concurrency tests with many more threads"
    )


@pytest.fixture(scope="session")
def thread_count(request):
    """Number of concurrent workers for concurrency tests"""
    return 256 if request.config.getoption("--stress") else 32
