"""Shared fixtures for sitepkg tests."""

import io
import os
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from sitepkg.api.cli.utils.output import Output
from sitepkg.core.config.package_settings import PackageSettings
from sitepkg.core.config.registry import OptionRegistry
from sitepkg.site import SitePackage


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def registry() -> OptionRegistry:
    """A fresh registry with one option of each kind."""
    registry = OptionRegistry()
    registry.declare_string("name", "n", True, "anon", "Name to use")
    registry.declare_int("retries", "r", True, 3, "retry count")
    registry.declare_uint("timeout", None, True, 30, "Timeout in seconds")
    registry.declare_bool("verbose", "v", True, False, "Verbose mode")
    registry.declare_bool("force", "f", False, False, "Command-line only")
    return registry


@pytest.fixture
def settings(temp_dir: Path) -> PackageSettings:
    """Package settings with every directory inside a temporary tree."""
    return PackageSettings(
        pkg_name="ibtools",
        pkg_version="1.4",
        site_root=temp_dir / "usr" / "site",
        local_etc_root=temp_dir / "etc" / "opt",
        home_dir=temp_dir / "home",
    )


@pytest.fixture
def make_site(settings: PackageSettings):
    """Factory for SitePackage objects whose output is captured in memory."""
    def factory(argv, command=None):
        out, err = io.StringIO(), io.StringIO()
        program = command[0] if command else os.path.basename(argv[0].split()[0])
        output = Output(program, out=out, show_stream=out, err=err)
        site = SitePackage(settings=settings, argv=argv, command=command, output=output)
        site.out, site.err = out, err
        return site

    return factory
