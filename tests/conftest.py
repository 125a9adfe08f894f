"""
Test bootstrap:
- Make src/ and tests/helpers importable without an installed package
- Keep SDK loggers quiet unless a test asks for them
"""
import logging
import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parent.parent
for path in (ROOT / "src", ROOT / "tests"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))


@pytest.fixture(autouse=True)
def _reset_sdk_logging():
    logger = logging.getLogger("intacct_sdk")
    level = logger.level
    yield
    logger.setLevel(level)
