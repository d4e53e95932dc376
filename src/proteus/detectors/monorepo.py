"""Workspace-system (monorepo) detection."""

import logging
import re
from typing import Callable, List, Optional

from ..models import MonorepoInfo, MonorepoType
from ..scanner.context import DetectorContext

logger = logging.getLogger(__name__)

TURBO_DEFAULT_WORKSPACES = ["packages/*", "apps/*"]
NX_DEFAULT_WORKSPACES = ["packages/*", "apps/*", "libs/*"]
LERNA_DEFAULT_WORKSPACES = ["packages/*"]


def _string_list(value) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _package_workspaces(ctx: DetectorContext) -> Optional[List[str]]:
    """Workspace globs from package.json (array or ``{packages: [...]}``)."""
    pkg = ctx.read_json("package.json") or {}
    workspaces = pkg.get("workspaces")
    if workspaces is None:
        return None
    if isinstance(workspaces, dict):
        return _string_list(workspaces.get("packages"))
    return _string_list(workspaces)


def _pnpm(ctx: DetectorContext) -> Optional[MonorepoInfo]:
    if not ctx.has_file("pnpm-workspace.yaml"):
        return None
    data = ctx.read_yaml("pnpm-workspace.yaml")
    packages = data.get("packages") if isinstance(data, dict) else None
    return MonorepoInfo(
        type=MonorepoType.PNPM_WORKSPACES, root_path=ctx.path, workspaces=_string_list(packages)
    )


def _package_json(ctx: DetectorContext) -> Optional[MonorepoInfo]:
    workspaces = _package_workspaces(ctx)
    if workspaces is None:
        return None
    monorepo_type = (
        MonorepoType.YARN_WORKSPACES if ctx.has_file("yarn.lock") else MonorepoType.NPM_WORKSPACES
    )
    return MonorepoInfo(type=monorepo_type, root_path=ctx.path, workspaces=workspaces)


def _turborepo(ctx: DetectorContext) -> Optional[MonorepoInfo]:
    if not ctx.has_file("turbo.json"):
        return None
    return MonorepoInfo(
        type=MonorepoType.TURBOREPO,
        root_path=ctx.path,
        workspaces=_package_workspaces(ctx) or list(TURBO_DEFAULT_WORKSPACES),
    )


def _nx(ctx: DetectorContext) -> Optional[MonorepoInfo]:
    if not ctx.has_file("nx.json"):
        return None
    return MonorepoInfo(
        type=MonorepoType.NX, root_path=ctx.path, workspaces=list(NX_DEFAULT_WORKSPACES)
    )


def _lerna(ctx: DetectorContext) -> Optional[MonorepoInfo]:
    if not ctx.has_file("lerna.json"):
        return None
    lerna = ctx.read_json("lerna.json") or {}
    return MonorepoInfo(
        type=MonorepoType.LERNA,
        root_path=ctx.path,
        workspaces=_string_list(lerna.get("packages")) or list(LERNA_DEFAULT_WORKSPACES),
    )


def parse_go_work(content: str) -> List[str]:
    """Extract module directories from ``use`` directives in a go.work file."""
    workspaces: List[str] = []
    stripped = re.sub(r"//.*", "", content)

    for block in re.findall(r"^\s*use\s*\((.*?)\)", stripped, re.MULTILINE | re.DOTALL):
        workspaces.extend(line.strip() for line in block.splitlines() if line.strip())
    workspaces.extend(re.findall(r"^\s*use\s+([^\s(]+)\s*$", stripped, re.MULTILINE))

    return [ws.strip("\"'").removeprefix("./") or "." for ws in workspaces]


def _go_workspace(ctx: DetectorContext) -> Optional[MonorepoInfo]:
    if not ctx.has_file("go.work"):
        return None
    content = ctx.read_text("go.work") or ""
    return MonorepoInfo(
        type=MonorepoType.GO_WORKSPACE, root_path=ctx.path, workspaces=parse_go_work(content)
    )


def _cargo_workspace(ctx: DetectorContext) -> Optional[MonorepoInfo]:
    if not ctx.has_file("Cargo.toml"):
        return None
    cargo = ctx.read_toml("Cargo.toml") or {}
    workspace = cargo.get("workspace")
    if not isinstance(workspace, dict):
        return None
    return MonorepoInfo(
        type=MonorepoType.CARGO_WORKSPACE,
        root_path=ctx.path,
        workspaces=_string_list(workspace.get("members")),
    )


# Evaluated in order; the first system that matches wins.
MONOREPO_DETECTORS: List[Callable[[DetectorContext], Optional[MonorepoInfo]]] = [
    _pnpm,
    _package_json,
    _turborepo,
    _nx,
    _lerna,
    _go_workspace,
    _cargo_workspace,
]


def detect_monorepo(ctx: DetectorContext) -> Optional[MonorepoInfo]:
    """Detect the workspace system at a root directory.

    Args:
        ctx: Probe bound to the candidate monorepo root

    Returns:
        MonorepoInfo for the first matching system, or None
    """
    for detector in MONOREPO_DETECTORS:
        info = detector(ctx)
        if info is not None:
            logger.debug("Detected %s with workspaces %s", info.type.value, info.workspaces)
            return info
    return None
