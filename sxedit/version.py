from __future__ import annotations

import importlib.metadata
import json
import subprocess
from pathlib import Path
from typing import Callable, NamedTuple, Optional

DISTRIBUTION = "sxedit"


class BuildInfo(NamedTuple):
    commit: Optional[str]
    date: Optional[str]
    dirty: bool


def _run_git(args: list[str], cwd: Path) -> Optional[str]:
    try:
        out = subprocess.check_output(["git", *args], cwd=str(cwd), stderr=subprocess.DEVNULL)
        return out.decode().strip() or None
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        return None


def _from_git_repo() -> Optional[BuildInfo]:
    here = Path(__file__).resolve().parent
    top = _run_git(["rev-parse", "--show-toplevel"], cwd=here)
    if not top:
        return None
    root = Path(top)
    status = _run_git(["status", "--porcelain"], cwd=root)
    return BuildInfo(
        commit=_run_git(["rev-parse", "HEAD"], cwd=root),
        date=_run_git(["show", "-s", "--format=%cI", "HEAD"], cwd=root),
        dirty=bool(status),
    )


def _from_embedded_file() -> Optional[BuildInfo]:
    # Generated at build time by hatch build hook
    try:
        from . import _build_info  # type: ignore
    except ImportError:
        return None
    commit = getattr(_build_info, "COMMIT", None)
    date = getattr(_build_info, "DATE", None)
    if commit or date:
        return BuildInfo(commit=commit, date=date, dirty=False)
    return None


def _from_direct_url() -> Optional[BuildInfo]:
    # PEP 610 direct_url.json carries the VCS commit when installed from VCS
    try:
        dist = importlib.metadata.distribution(DISTRIBUTION)
        text = dist.read_text("direct_url.json")
    except importlib.metadata.PackageNotFoundError:
        return None
    if not text:
        return None
    try:
        commit = (json.loads(text).get("vcs_info") or {}).get("commit_id")
    except (json.JSONDecodeError, AttributeError):
        return None
    if commit:
        return BuildInfo(commit=commit, date=None, dirty=False)
    return None


SOURCES: tuple[Callable[[], Optional[BuildInfo]], ...] = (
    _from_git_repo, _from_embedded_file, _from_direct_url,
)


def get_build_info() -> BuildInfo:
    # Priority: live git repo -> embedded file -> direct_url.json -> unknowns
    for getter in SOURCES:
        info = getter()
        if info and (info.commit or info.date):
            return info
    return BuildInfo(commit=None, date=None, dirty=False)


def get_version_string() -> str:
    info = get_build_info()
    dirty_suffix = "-dirty" if info.dirty else ""
    commit = info.commit[:7] if info.commit else "unknown"
    date = info.date or "unknown"
    return f"{commit}{dirty_suffix} {date}"
