"""
Tests that the installable distribution covers the whole source tree.
"""

from pathlib import Path

import toml

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"


def _setuptools_config():
    return toml.load(ROOT / "pyproject.toml")["tool"]["setuptools"]


class TestPackaging:
    """Test pyproject.toml against the src/ layout."""

    def test_every_source_package_is_installed(self):
        source_packages = {
            path.name
            for path in SRC.iterdir()
            if path.is_dir() and any(path.glob("*.py"))
        }

        assert set(_setuptools_config()["packages"]) == source_packages

    def test_every_top_level_module_is_installed(self):
        modules = {path.stem for path in SRC.glob("*.py")}

        assert set(_setuptools_config()["py-modules"]) == modules

    def test_script_entry_point_exists(self):
        project = toml.load(ROOT / "pyproject.toml")["project"]
        module, func = project["scripts"]["bananalike"].split(":")

        assert (SRC / f"{module}.py").exists()
        assert f"def {func}(" in (SRC / f"{module}.py").read_text()
