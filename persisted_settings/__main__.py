"""Command line entry point for inspecting persisted settings files."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from pydantic import ValidationError

from .config import DEFAULT_DOMAIN, SettingsFormat, SettingsIdentity
from .errors import DecodeError, PathResolutionError
from .io.codecs import codec_for
from .utils.paths import SettingsPath, resolve_identity_path


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Persisted settings")
    parser.add_argument("--company", required=True, help="Organization name.")
    parser.add_argument("--project", required=True, help="Application name.")
    parser.add_argument(
        "--domain",
        default=DEFAULT_DOMAIN,
        help="Reverse-DNS qualifier of the organization.",
    )
    parser.add_argument(
        "--format",
        choices=[fmt.value for fmt in SettingsFormat],
        default=SettingsFormat.TOML.value,
        help="Serialization of the settings file.",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Also decode and print the stored settings.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging.",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        identity = SettingsIdentity(
            domain=args.domain,
            company=args.company,
            project=args.project,
            format=args.format,
        )
        path = resolve_identity_path(identity)
    except (ValidationError, PathResolutionError) as exc:
        parser.error(str(exc))

    output: dict[str, Any] = {
        "identity": identity.as_dict(),
        "directory": str(path.directory),
        "file": str(path.file),
        "exists": path.file.exists(),
    }
    if args.show:
        output.update(_read_stored(path, identity.format))

    json.dump(output, sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")


def _read_stored(path: SettingsPath, settings_format: SettingsFormat) -> dict[str, Any]:
    if not path.file.exists():
        return {"data": None, "error": "settings file does not exist"}
    try:
        text = path.file.read_text(encoding="utf-8")
        data = codec_for(settings_format).decode(text)
    except (OSError, UnicodeDecodeError, DecodeError) as exc:
        return {"data": None, "error": str(exc)}
    return {"data": data, "error": None}


if __name__ == "__main__":  # pragma: no cover
    main()
