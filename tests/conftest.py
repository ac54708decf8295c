from __future__ import annotations

import pytest


@pytest.fixture
def upload_root(tmp_path):
    root = tmp_path / "downloads"
    root.mkdir()
    return root
