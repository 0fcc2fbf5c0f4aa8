"""Resolve the per-user configuration directory for a settings identity."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..config import SettingsFormat, SettingsIdentity
from ..errors import PathResolutionError

_WHITESPACE = re.compile(r"\s+")
_SEPARATORS = ("/", "\\", "\0")


@dataclass(frozen=True, slots=True)
class SettingsPath:
    """Location of one settings file and the directory that holds it."""

    directory: Path
    file: Path


def resolve_settings_path(
    domain: str,
    company: str,
    project: str,
    *,
    extension: str = SettingsFormat.TOML.extension,
) -> SettingsPath:
    """Map an organization triple to its settings directory and file.

    Parameters
    ----------
    domain:
        Reverse-DNS qualifier such as ``"com"``; only used on macOS.
    company:
        Organization name; used on Windows and macOS.
    project:
        Application name. Also names the file: ``<project>.<extension>``.
    extension:
        File extension without the leading dot.

    Nothing is created on disk.
    """

    project_name = project.strip()
    suffix = extension.strip().lstrip(".")
    if not project_name or not suffix:
        raise PathResolutionError("A project name and a file extension are required.")
    for name in (domain, company, project_name, suffix):
        if any(sep in name for sep in _SEPARATORS) or name.strip() in (".", ".."):
            raise PathResolutionError(f"{name!r} cannot be used as part of a file path.")

    directory = config_directory(domain, company, project_name)
    return SettingsPath(directory=directory, file=directory / f"{project_name}.{suffix}")


def resolve_identity_path(identity: SettingsIdentity) -> SettingsPath:
    return resolve_settings_path(
        identity.domain,
        identity.company,
        identity.project,
        extension=identity.format.extension,
    )


def config_directory(domain: str, company: str, project: str) -> Path:
    """Return the platform configuration directory for the given identity."""

    try:
        base = Path(user_config_dir(roaming=True))
    except (KeyError, OSError, RuntimeError) as exc:
        raise PathResolutionError(
            f"Could not determine the user configuration directory: {exc}"
        ) from exc

    base = base.expanduser()
    if not str(base) or not base.is_absolute():
        raise PathResolutionError(f"User configuration directory is not absolute: {base!s}")

    return base.joinpath(*_project_segments(domain, company, project))


def _project_segments(domain: str, company: str, project: str) -> tuple[str, ...]:
    platform = sys.platform
    if platform == "win32":
        segments = (company.strip(), project.strip(), "config")
    elif platform == "darwin":
        parts = [_hyphenate(domain), _hyphenate(company), _hyphenate(project)]
        segments = (".".join(parts),) if all(parts) else ("",)
    else:
        segments = (_WHITESPACE.sub("", project).lower(),)

    if not all(segments):
        raise PathResolutionError(
            f"Cannot build a configuration directory for {domain!r}, {company!r}, {project!r}."
        )
    return segments


def _hyphenate(value: str) -> str:
    return _WHITESPACE.sub("-", value.strip())
