"""
Project and caller resolution.

Decides which project a log call belongs to:

- LOCAL callers live inside the root project's directory tree, e.g.
  ``my-app/src/my_app/server.py``.
- THIRD-PARTY callers live anywhere else, typically in ``site-packages``.

The root project is the one owning the ``__main__`` script, or else the
current working directory. Its ``pyproject.toml`` supplies the application
name used for the log file and for local namespaces.
"""

from __future__ import annotations

import functools
import importlib.metadata
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .exceptions import MetadataError

PROJECT_MARKERS = ("pyproject.toml", "setup.cfg", "setup.py")

_VENDOR_DIRS = frozenset({"site-packages", "dist-packages"})


@dataclass(frozen=True)
class ProjectMetadata:
    root: Path
    name: str
    product_name: str | None = None

    @property
    def label(self) -> str:
        """Application label: the product name, else the project name."""
        return self.product_name or self.name


@dataclass(frozen=True)
class CallerIdentity:
    """The module a logger is created for.

    Attributes:
        name: Module name, usually ``__name__``
        path: Module file, usually ``__file__``
    """

    name: str
    path: Path | None = None

    @classmethod
    def from_module(cls, name: str, path: str | Path | None = None) -> CallerIdentity:
        """Build an identity, looking the file up in ``sys.modules`` when omitted."""
        if path is None:
            path = getattr(sys.modules.get(name), "__file__", None)
        return cls(name=name, path=Path(path).resolve() if path else None)

    @property
    def key(self) -> str:
        """Registry key: the module path, or the module name when it has no file."""
        return str(self.path) if self.path else self.name

    @property
    def filename(self) -> str:
        return self.path.name if self.path else self.name


@dataclass(frozen=True)
class CallerInfo:
    identity: CallerIdentity
    package_name: str
    is_local: bool

    @property
    def filename(self) -> str:
        return self.identity.filename


def find_project_root(start: Path) -> Path | None:
    """Nearest directory at or above ``start`` holding a project marker.

    The search stops at ``site-packages`` so installed distributions never
    resolve to an enclosing virtualenv's project.
    """
    current = start if start.is_dir() else start.parent
    for directory in (current, *current.parents):
        if directory.name in _VENDOR_DIRS:
            return None
        if any((directory / marker).is_file() for marker in PROJECT_MARKERS):
            return directory
    return None


def read_project_metadata(root: Path) -> ProjectMetadata:
    """Read the project name from ``pyproject.toml``.

    Name resolution: ``[project] name``, then ``[tool.poetry] name``, then the
    directory name. ``[tool.nslogger] product-name`` sets the product name.

    Raises:
        MetadataError: ``pyproject.toml`` exists but cannot be read or parsed.
    """
    pyproject = root / "pyproject.toml"
    if not pyproject.is_file():
        return ProjectMetadata(root=root, name=root.name)

    try:
        with pyproject.open("rb") as f:
            data: dict[str, Any] = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise MetadataError(path=str(pyproject), reason=str(exc)) from exc

    project = data.get("project") or {}
    tool = data.get("tool") or {}
    name = project.get("name") or (tool.get("poetry") or {}).get("name") or root.name
    product_name = (tool.get("nslogger") or {}).get("product-name")

    return ProjectMetadata(
        root=root,
        name=str(name),
        product_name=str(product_name) if product_name else None,
    )


def resolve_root_path() -> Path:
    """Root project directory of the running application."""
    main_file = getattr(sys.modules.get("__main__"), "__file__", None)
    candidates = [Path(main_file).resolve().parent] if main_file else []
    candidates.append(Path.cwd())

    for candidate in candidates:
        root = find_project_root(candidate)
        if root is not None:
            return root
    return candidates[-1]


@functools.lru_cache(maxsize=1)
def _packages_distributions() -> dict[str, list[str]]:
    return dict(importlib.metadata.packages_distributions())


def distribution_name(module_name: str) -> str | None:
    """Name of the installed distribution providing a top-level module."""
    top_level = module_name.split(".")[0]
    distributions = _packages_distributions().get(top_level)
    return distributions[0] if distributions else None


def is_within(path: Path, root: Path) -> bool:
    """True when ``path`` lies inside ``root`` and not in a vendored directory below it."""
    try:
        relative = path.relative_to(root)
    except ValueError:
        return False
    return not any(part in _VENDOR_DIRS for part in relative.parts)


class PackageResolver:
    """Resolves callers against the root project.

    Args:
        project: Metadata of the root project
    """

    def __init__(self, project: ProjectMetadata) -> None:
        self.project = project

    def resolve(self, identity: CallerIdentity) -> CallerInfo:
        if identity.path is not None and is_within(identity.path, self.project.root):
            return CallerInfo(identity=identity, package_name=self.project.name, is_local=True)
        return CallerInfo(identity=identity, package_name=self._package_name(identity), is_local=False)

    @staticmethod
    def _package_name(identity: CallerIdentity) -> str:
        top_level = identity.name.split(".")[0]
        name = distribution_name(identity.name)
        if name:
            return name
        root = find_project_root(identity.path) if identity.path is not None else None
        if root is None:
            return top_level
        try:
            return read_project_metadata(root).name
        except MetadataError:
            # Unreadable metadata of a foreign project: fall back to the module name.
            return top_level
