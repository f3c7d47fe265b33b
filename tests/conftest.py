"""Test configuration and fixtures for clipcat."""

import pytest


@pytest.fixture
def project_dir(tmp_path):
    """Create a small project tree.

    proj/
    ├── README.md
    └── src/
        ├── a.ts
        ├── logo.png
        ├── __pycache__/
        │   └── a.cpython-312.pyc
        ├── node_modules/
        │   └── x.js
        └── utils/
            ├── helpers.ts
            └── helpers.ts.map
    """
    proj = tmp_path / "proj"
    src = proj / "src"
    (src / "utils").mkdir(parents=True)
    (src / "node_modules").mkdir()
    (src / "__pycache__").mkdir()

    (proj / "README.md").write_text("# Project\n")
    (src / "a.ts").write_text("hello")
    (src / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00")
    (src / "node_modules" / "x.js").write_text("module.exports = 1;")
    (src / "__pycache__" / "a.cpython-312.pyc").write_bytes(b"\x00\x01")
    (src / "utils" / "helpers.ts").write_text("export const x = 1;\n")
    (src / "utils" / "helpers.ts.map").write_text("{}")
    return proj
