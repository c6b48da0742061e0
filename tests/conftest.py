"""
Pytest configuration and fixtures for datalayer tests.
"""

from __future__ import annotations

import logging
import os
from io import StringIO
from typing import Dict, Generator, List

import pytest

from datalayer.config import reset_config
from datalayer.storage import MemoryStorage, ReadOnlyStorage, SlotStorage


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clean_env() -> Generator[None, None, None]:
    """Drop DATALAYER_* variables and the config singleton around each test."""
    original: Dict[str, str] = {
        k: v for k, v in os.environ.items() if k.startswith("DATALAYER_")
    }
    for key in original:
        os.environ.pop(key)
    reset_config()

    yield

    reset_config()
    for key in [k for k in os.environ if k.startswith("DATALAYER_")]:
        os.environ.pop(key)
    os.environ.update(original)

    logging.getLogger("datalayer.audit").setLevel(logging.INFO)
    root = logging.getLogger("datalayer")
    for handler in [h for h in root.handlers if getattr(h, "_datalayer", False)]:
        root.removeHandler(handler)


# ============================================================================
# Storage Fixtures
# ============================================================================


@pytest.fixture
def seed_names() -> List[str]:
    """Records held at ids 0-3."""
    return ["Jane", "John", "Goku", "Vegeta"]


@pytest.fixture
def memory_storage(seed_names) -> MemoryStorage:
    return MemoryStorage(initial=seed_names)


@pytest.fixture
def slot_storage(seed_names) -> SlotStorage:
    return SlotStorage(initial=seed_names)


@pytest.fixture
def readonly_storage(seed_names) -> ReadOnlyStorage:
    return ReadOnlyStorage(initial=seed_names)


@pytest.fixture(params=["memory", "slot"])
def full_storage(request, seed_names):
    """Every backend implementing reader, writer and remover."""
    backends = {"memory": MemoryStorage, "slot": SlotStorage}
    return backends[request.param](initial=seed_names)


# ============================================================================
# Logging Fixtures
# ============================================================================


@pytest.fixture
def captured_audit() -> Generator[StringIO, None, None]:
    """Capture JSON lines written by AuditLogger."""
    import datalayer.logger  # noqa: F401  (installs the default handler)

    output = StringIO()
    audit_logger = logging.getLogger("datalayer.audit")
    saved = list(audit_logger.handlers)
    audit_logger.handlers.clear()
    handler = logging.StreamHandler(output)
    handler.setFormatter(logging.Formatter("%(message)s"))
    audit_logger.addHandler(handler)

    yield output

    audit_logger.handlers.clear()
    audit_logger.handlers.extend(saved)
