"""
Package settings for sitepkg utilities.

Every utility belongs to a site package: a name and a version, installed
under a site root, with site-local configuration under /etc/opt. This module
derives the package's directory layout and the configuration search
directories from those few settings.
"""

from pathlib import Path
from typing import List, Optional

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PackageSettings(BaseSettings):
    """
    Name, version and directory layout of a site package.

    Configuration Sources (in order of precedence):
    1. Constructor arguments (highest priority)
    2. Environment variables (SITEPKG_*)
    3. Default values (lowest priority)

    Environment Variable Examples:
        SITEPKG_SITE_ROOT=/opt/site
        SITEPKG_LOCAL_ETC_ROOT=/tmp/etc
        SITEPKG_HOME_DIR=/home/admin
        SITEPKG_SECRETS_DIR=/etc/opt/ibtools/private
    """

    model_config = SettingsConfigDict(
        env_prefix='SITEPKG_',
        case_sensitive=False,
        validate_default=True,
        extra='ignore',
    )

    pkg_name: str = Field(
        description="Package name, e.g. 'ibtools'"
    )

    pkg_version: str = Field(
        description="Package version string"
    )

    site_root: Path = Field(
        default=Path("/usr/site"),
        description="Root directory of installed site packages"
    )

    local_etc_root: Path = Field(
        default=Path("/etc/opt"),
        description="Root directory of site-local configuration"
    )

    home_dir: Optional[Path] = Field(
        default=None,
        description="Home directory for per-user config (resolved at run time if unset)"
    )

    secrets_dir: Optional[Path] = Field(
        default=None,
        description="Directory holding secret files"
    )

    @field_validator('pkg_name', 'pkg_version')
    def validate_not_empty(cls, v: str) -> str:
        """Package name and version must be non-empty."""
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @property
    def package(self) -> str:
        """Name and version joined, e.g. 'ibtools-1.4'."""
        return f"{self.pkg_name}-{self.pkg_version}"

    @property
    def package_dir(self) -> Path:
        return self.site_root / self.package

    @property
    def package_etc(self) -> Path:
        return self.package_dir / "etc"

    @property
    def local_etc(self) -> Path:
        return self.local_etc_root / self.pkg_name

    def resolve_home(self) -> Optional[Path]:
        """Home directory, or None (with a warning) if it cannot be determined."""
        if self.home_dir is not None:
            return self.home_dir
        try:
            return Path.home()
        except (RuntimeError, KeyError) as e:
            logger.warning(f"Failure getting home dir: {e}")
            return None

    def config_dirs(self) -> List[Path]:
        """
        Configuration search directories, lowest priority first.

        Files in later directories override earlier ones: package etc, site
        local etc, version-specific site local etc, then the user's
        ``~/.<pkg_name>`` and ``~/.<pkg_name>-<version>``.
        """
        dirs = [
            self.package_etc,
            self.local_etc,
            Path(f"{self.local_etc}-{self.pkg_version}"),
        ]
        home = self.resolve_home()
        if home is not None:
            dirs.append(home / f".{self.pkg_name}")
            dirs.append(home / f".{self.package}")
        return dirs

    def help_dirs(self) -> List[Path]:
        """Directories holding per-command help files, lowest priority first."""
        return [
            self.package_dir / "share" / "pod" / "pod1",
            Path("/usr/share/doc") / self.pkg_name / "pod1",
            Path("/usr/share/doc") / self.package / "pod1",
        ]
