# tests/conftest.py
import sys, os
# Add project root to sys.path so `mipsstats` is importable without installing
ROOT = os.path.dirname(os.path.dirname(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import pytest


@pytest.fixture
def write_trace(tmp_path):
    """Write '<addr> <word>' lines to a trace file and return its path."""
    def _write(entries, name="trace.txt"):
        path = tmp_path / name
        path.write_text("".join(f"{a:08x} {w:08x}\n" for a, w in entries))
        return path
    return _write
