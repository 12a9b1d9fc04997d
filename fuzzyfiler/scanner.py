"""Bounded directory scanning feeding the ranker.

The walk is a lexically ordered pre-order traversal. Every node is handed to
a visitor that answers with a ``Disposition``; the walker itself only obeys
those answers, so depth/exclude/hidden/count policy and error tolerance live
in one place and can be tested without touching the filesystem.
"""

from __future__ import annotations

import enum
import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from .config import DEFAULT_CONFIG, FilerConfig, should_exclude

logger = logging.getLogger(__name__)

ROOT_PARENT = "."


class ScanError(OSError):
    """Raised when the scan root itself cannot be listed."""


class Disposition(enum.Enum):
    INCLUDE = "include"
    SKIP = "skip"
    PRUNE = "prune-subtree"
    STOP = "stop-all"


@dataclass(frozen=True)
class Entry:
    """One scanned filesystem node, addressed relative to the scan root."""

    path: str
    name: str
    is_dir: bool
    parent_path: str = ROOT_PARENT


@dataclass(frozen=True)
class ScanLimits:
    max_depth: int
    max_file_count: int
    exclude_patterns: tuple[str, ...] = ()

    @classmethod
    def from_config(cls, config: FilerConfig) -> "ScanLimits":
        return cls(
            max_depth=config.max_depth,
            max_file_count=config.max_files,
            exclude_patterns=tuple(config.exclude_patterns),
        )


DEFAULT_LIMITS = ScanLimits.from_config(DEFAULT_CONFIG)


def node_depth(rel_path: str) -> int:
    """Depth of a node below the root; root-level entries have depth 1."""
    return rel_path.count(os.sep) + 1


class LimitVisitor:
    """Default visitor enforcing ``ScanLimits`` plus the hidden-name rule."""

    def __init__(self, limits: ScanLimits) -> None:
        self.limits = limits
        self.accepted = 0

    def visit(self, rel_path: str, name: str, is_dir: bool) -> Disposition:
        rejected = Disposition.PRUNE if is_dir else Disposition.SKIP
        if node_depth(rel_path) > self.limits.max_depth:
            return rejected
        if should_exclude(rel_path, self.limits.exclude_patterns):
            return rejected
        if name.startswith("."):
            return rejected
        if self.accepted >= self.limits.max_file_count:
            return Disposition.STOP
        self.accepted += 1
        return Disposition.INCLUDE

    def visit_error(self, rel_path: str, exc: OSError) -> Disposition:
        logger.debug("skipping unreadable node %s: %s", rel_path, exc)
        return Disposition.SKIP


def _list_children(directory: str) -> list[os.DirEntry]:
    with os.scandir(directory) as entries:
        return sorted(entries, key=lambda child: child.name)


def _walk(root: str, top_level: list[os.DirEntry], visitor: LimitVisitor) -> Iterator[Entry]:
    # Stack of (parent relative path, child); reversed so names pop in order.
    stack: list[tuple[str, os.DirEntry]] = [(ROOT_PARENT, child) for child in reversed(top_level)]
    while stack:
        parent_rel, child = stack.pop()
        rel_path = child.name if parent_rel == ROOT_PARENT else os.path.join(parent_rel, child.name)
        try:
            is_dir = child.is_dir(follow_symlinks=False)
        except OSError as exc:
            disposition = visitor.visit_error(rel_path, exc)
        else:
            disposition = visitor.visit(rel_path, child.name, is_dir)

        if disposition is Disposition.STOP:
            logger.debug("scan of %s stopped at file cap", root)
            return
        if disposition is not Disposition.INCLUDE:
            continue

        yield Entry(path=rel_path, name=child.name, is_dir=is_dir, parent_path=parent_rel)
        if not is_dir:
            continue
        try:
            grandchildren = _list_children(child.path)
        except OSError as exc:
            if visitor.visit_error(rel_path, exc) is Disposition.STOP:
                return
            continue
        stack.extend((rel_path, grandchild) for grandchild in reversed(grandchildren))


def scan_entries(
    root: str | os.PathLike[str],
    limits: ScanLimits = DEFAULT_LIMITS,
    visitor: LimitVisitor | None = None,
) -> list[Entry]:
    """Scan ``root`` once and return its bounded, filtered entry list.

    Raises ``ScanError`` only when ``root`` cannot be listed. Errors on nodes
    below the root are routed through the visitor and skipped. The root
    directory itself is never part of the result.
    """
    root_str = os.fspath(root)
    try:
        top_level = _list_children(root_str)
    except OSError as exc:
        raise ScanError(exc.errno, exc.strerror, root_str) from exc

    active_visitor = visitor if visitor is not None else LimitVisitor(limits)
    entries = list(_walk(root_str, top_level, active_visitor))
    logger.debug("scanned %s: %d entries", root_str, len(entries))
    return entries


def absolute_entry_path(root: Path, entry: Entry) -> Path:
    return root / entry.path


__all__ = [
    "Disposition",
    "Entry",
    "LimitVisitor",
    "ScanError",
    "ScanLimits",
    "DEFAULT_LIMITS",
    "node_depth",
    "scan_entries",
    "absolute_entry_path",
]
