"""Where named calendar configurations come from."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Mapping, Union

import yaml

from ._exceptions import CalendarNotFoundError, InvalidCalendarError

logger = logging.getLogger(__name__)

DEFAULT_CALENDAR_DIR = Path(__file__).parent / "calendars"


class CalendarSource(ABC):
    """Resolves a calendar name to its configuration mapping."""

    @abstractmethod
    def fetch(self, name: str) -> Mapping[str, Any]:
        """
        Return the configuration for ``name``, with optional keys
        ``business_days`` and ``holidays``.  Raises CalendarNotFoundError
        when there is none.
        """
        raise NotImplementedError

    @abstractmethod
    def names(self) -> list[str]:
        raise NotImplementedError


class YamlDirectorySource(CalendarSource):
    """One ``<name>.yml`` (or ``.yaml``) file per calendar in a directory."""

    SUFFIXES: tuple[str, ...] = (".yml", ".yaml")

    def __init__(self, directory: Union[str, Path] = DEFAULT_CALENDAR_DIR) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, name: str) -> Path:
        # bare file stems only; nothing that could leave the directory
        if not name or name in (".", "..") or Path(name).name != name:
            raise CalendarNotFoundError(f"No calendar named {name!r}.")
        for suffix in self.SUFFIXES:
            path = self._directory / f"{name}{suffix}"
            if path.is_file():
                return path
        raise CalendarNotFoundError(
            f"No calendar named {name!r} in {self._directory}."
        )

    def fetch(self, name: str) -> Mapping[str, Any]:
        path = self.path_for(name)
        logger.debug("Reading calendar %r from %s", name, path)
        try:
            with open(path, "r") as f:
                cfg = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise InvalidCalendarError(f"Malformed calendar file {path}: {exc}") from exc

        if cfg is None:
            return {}
        if not isinstance(cfg, Mapping):
            raise InvalidCalendarError(
                f"Calendar file {path} must contain a mapping; got {type(cfg).__name__}."
            )
        return cfg

    def names(self) -> list[str]:
        if not self._directory.is_dir():
            return []
        return sorted(
            p.stem for p in self._directory.iterdir()
            if p.is_file() and p.suffix in self.SUFFIXES
        )

    def __repr__(self) -> str:
        return f"YamlDirectorySource(directory={str(self._directory)!r})"


class MappingSource(CalendarSource):
    """Calendars held in memory, keyed by name."""

    def __init__(self, calendars: Mapping[str, Mapping[str, Any]]) -> None:
        self._calendars = dict(calendars)

    def fetch(self, name: str) -> Mapping[str, Any]:
        try:
            return self._calendars[name]
        except KeyError:
            raise CalendarNotFoundError(f"No calendar named {name!r}.") from None

    def names(self) -> list[str]:
        return sorted(self._calendars)

    def __repr__(self) -> str:
        return f"MappingSource(names={self.names()})"
