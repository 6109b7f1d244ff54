"""
Tool option models.

Each model describes one wrapped tool invocation (go build, helm install,
ko apply, ...). Required fields may be empty here; the runners validate
them and raise OptionValidationError before spawning anything.
"""

from __future__ import annotations

from pydantic import Field

from .base import MagekitBaseModel

# =============================================================================
# Go
# =============================================================================


class GoBuildOptions(MagekitBaseModel):
    """Options for ``go build`` of a single binary."""

    binary: str = ""
    version: str = ""
    os: str = ""
    arch: str = ""
    debug: bool = False
    packages: list[str] = Field(default_factory=list)
    destination_dir: str = ""


# =============================================================================
# Helm
# =============================================================================


class HelmInstallOptions(MagekitBaseModel):
    """Options for ``helm install``."""

    release_name: str = ""
    chart: str = ""
    namespace: str = ""
    values: list[str] = Field(default_factory=list)  # --values files
    set: list[str] = Field(default_factory=list)  # --set key=value
    create_namespace: bool = False
    wait: bool = False
    timeout: str = ""


class HelmUpgradeOptions(MagekitBaseModel):
    """Options for ``helm upgrade``."""

    release_name: str = ""
    chart: str = ""
    namespace: str = ""
    values: list[str] = Field(default_factory=list)
    set: list[str] = Field(default_factory=list)
    install: bool = False  # --install
    wait: bool = False
    timeout: str = ""


# =============================================================================
# ko
# =============================================================================


class KoBuildOptions(MagekitBaseModel):
    """Options for ``ko build``."""

    import_path: str = ""
    tags: list[str] = Field(default_factory=list)
    platform: list[str] = Field(default_factory=list)
    base_image: str = ""  # exported as KO_DEFAULTBASEIMAGE
    base_import_paths: bool = False
    bare: bool = False
    local: bool = False
    push: bool = False
    preserve_import_paths: bool = False


class KoApplyOptions(MagekitBaseModel):
    """Options for ``ko apply``."""

    filenames: list[str] = Field(default_factory=list)
    recursive: bool = False
    selector: str = ""
    base_image: str = ""
    base_import_paths: bool = False
    platform: list[str] = Field(default_factory=list)
    local: bool = False
    bare: bool = False
    preserve_import_paths: bool = False


class KoDeleteOptions(MagekitBaseModel):
    """Options for ``ko delete``."""

    filenames: list[str] = Field(default_factory=list)
    recursive: bool = False
    selector: str = ""
