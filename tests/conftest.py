"""Root test configuration: isolate every test from a developer's config.yaml and env"""

import pytest

from memofiche.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop MEMOFICHE_* env vars so settings defaults apply unless a test sets them."""
    for name in Settings.model_fields:
        monkeypatch.delenv(f"MEMOFICHE_{name.upper()}", raising=False)
