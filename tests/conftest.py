"""Pytest configuration for tests.

No sys.path hacks - tests should import from installed asmsnap package.
"""

import pytest


def pytest_addoption(parser):
    """Add gated perf test option."""
    parser.addoption(
        "--run-perf",
        action="store_true",
        default=False,
        help="Run performance sentinel benchmarks (gated)."
    )


def pytest_collection_modifyitems(config, items):
    """Skip perf-marked tests unless --run-perf is set."""
    if config.getoption("--run-perf"):
        return
    skip_perf = pytest.mark.skip(reason="perf tests gated; pass --run-perf")
    for item in items:
        if "perf" in item.keywords:
            item.add_marker(skip_perf)


@pytest.fixture
def scenario_snapshot():
    """One reference, one type T with a single parameterless method M."""
    return {
        "format": "asmsnap.snapshot",
        "version": "0.1",
        "assembly": {
            "full_name": "Test",
            "references": ["Lib, Version=1.0.0.0"],
            "types": [
                {
                    "full_name": "T",
                    "token": 0x02000002,
                    "assembly_qualified_name": "T, Test",
                    "name": "T",
                    "namespace": None,
                    "base_type": None,
                    "methods": [
                        {"name": "M", "token": 0x06000001, "parameters": []}
                    ],
                }
            ],
        },
    }
