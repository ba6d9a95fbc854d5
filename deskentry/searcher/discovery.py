"""
Discovery of `.desktop` files on disk.

    for path in iter_entry_paths(default_paths()):
        ...

    for source, path in default_path_sources():
        print(source.value, path)
"""
from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, List, Mapping, Optional, Set, Tuple, Union

logger = logging.getLogger(__name__)

DESKTOP_SUFFIX = ".desktop"

SYSTEM_FLATPAK_DIR = Path("/var/lib/flatpak/exports/share/applications")
SYSTEM_SNAP_DIR = Path("/var/lib/snapd/desktop/applications")


class PathSource(str, Enum):
    """Where an application directory comes from."""
    LOCAL          = "local"
    LOCAL_DESKTOP  = "local_desktop"
    LOCAL_FLATPAK  = "local_flatpak"
    SYSTEM         = "system"
    SYSTEM_FLATPAK = "system_flatpak"
    SYSTEM_SNAP    = "system_snap"
    OTHER          = "other"


def default_path_sources(env: Optional[Mapping[str, str]] = None) -> List[Tuple[PathSource, Path]]:
    """
    (source, directory) pairs in search order: ~/Desktop, the user's
    flatpak exports and XDG_DATA_HOME, then XDG_DATA_DIRS and the system
    flatpak and snap exports. Repeated directories keep their first slot.
    """
    env = os.environ if env is None else env
    home = Path(env.get("HOME") or Path.home())

    data_home = Path(env.get("XDG_DATA_HOME") or home / ".local" / "share")
    data_dirs = [Path(d) for d in (env.get("XDG_DATA_DIRS") or "/usr/local/share:/usr/share").split(":") if d]

    candidates = [
        (PathSource.LOCAL_DESKTOP, home / "Desktop"),
        (PathSource.LOCAL_FLATPAK, data_home / "flatpak" / "exports" / "share" / "applications"),
        (PathSource.LOCAL, data_home / "applications"),
        *((PathSource.SYSTEM, d / "applications") for d in data_dirs),
        (PathSource.SYSTEM_FLATPAK, SYSTEM_FLATPAK_DIR),
        (PathSource.SYSTEM_SNAP, SYSTEM_SNAP_DIR),
    ]

    found: List[Tuple[PathSource, Path]] = []
    seen: Set[Path] = set()
    for source, path in candidates:
        if path not in seen:
            seen.add(path)
            found.append((source, path))
    return found


def default_paths(env: Optional[Mapping[str, str]] = None) -> List[Path]:
    """Directories of `default_path_sources`, user locations first."""
    return [path for _, path in default_path_sources(env)]


def guess_path_source(path: Union[str, "os.PathLike[str]"], env: Optional[Mapping[str, str]] = None) -> PathSource:
    """Best guess of which default location an entry file was found in."""
    path = Path(path)
    for source, directory in default_path_sources(env):
        if path == directory or directory in path.parents:
            return source
    return PathSource.OTHER


def iter_entry_paths(directories: Iterable[Union[str, "os.PathLike[str]"]]) -> Iterator[Path]:
    """
    Yield every `.desktop` file below `directories`, in order.

    Inside a directory, files come first (sorted by name), then its
    subdirectories depth-first. Directories are tracked by their resolved
    path, so symlink loops are walked once. Unreadable directories are
    skipped.
    """
    visited: Set[Path] = set()
    stack: List[Path] = [Path(d) for d in directories][::-1]

    while stack:
        current = stack.pop()

        if current.is_file():
            if current.suffix == DESKTOP_SUFFIX:
                yield current
            continue

        try:
            real = current.resolve(strict=True)
        except (OSError, RuntimeError):
            continue
        if real in visited or not real.is_dir():
            continue
        visited.add(real)

        try:
            children = sorted(current.iterdir())
        except OSError as e:
            logger.debug("[Discovery] cannot list %s: %s", current, e)
            continue

        subdirs: List[Path] = []
        for child in children:
            if child.is_dir():
                subdirs.append(child)
            elif child.suffix == DESKTOP_SUFFIX and child.is_file():
                yield child
        stack.extend(reversed(subdirs))
