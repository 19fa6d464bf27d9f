"""YAML settings source with conf.d directory support.

Settings classes read, in order of increasing precedence:
- conf/<name>.yaml        (base configuration)
- conf/<name>.d/*.yaml    (override files, merged alphabetically)

The base directory can be moved with ``BACKUP_SERVICE_CONFIG_DIR``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic_settings import YamlConfigSettingsSource

if TYPE_CHECKING:
    from pydantic_settings import BaseSettings

CONFIG_DIR_ENV = "BACKUP_SERVICE_CONFIG_DIR"
DEFAULT_CONFIG_DIR = "conf"


class ConfDYamlConfigSettingsSource(YamlConfigSettingsSource):
    """YAML source that merges ``<name>.yaml`` with ``<name>.d/*.yaml``."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        name: str,
        base_dir: str | Path | None = None,
        yaml_file_encoding: str | None = "utf-8",
    ) -> None:
        config_base = Path(base_dir or os.getenv(CONFIG_DIR_ENV, DEFAULT_CONFIG_DIR))

        yaml_files: list[Path] = []

        main_file = config_base / f"{name}.yaml"
        if main_file.exists():
            yaml_files.append(main_file)

        confd_path = config_base / f"{name}.d"
        if confd_path.is_dir():
            yaml_files.extend(sorted(confd_path.glob("*.yaml")))
            yaml_files.extend(sorted(confd_path.glob("*.yml")))

        super().__init__(
            settings_cls=settings_cls,
            yaml_file=yaml_files if yaml_files else None,
            yaml_file_encoding=yaml_file_encoding,
        )


def create_yaml_source(
    settings_cls: type[BaseSettings], name: str
) -> ConfDYamlConfigSettingsSource:
    """Create the YAML source for one settings domain (``backup``, ``aws``, ...)."""
    return ConfDYamlConfigSettingsSource(settings_cls, name=name)
