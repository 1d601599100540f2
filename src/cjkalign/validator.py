"""Structural validation for profile files."""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

from cjkalign.config import FONT_SIZE_STEPS, REQUIRED_ROLES, ROLE_NAMES

REQUIRED_FIELDS = ("fontnames", "fontscales")


def validate_profile(data: dict[str, Any]) -> list[str]:
    """Run all checks on a profile dict. Returns list of issues (empty = valid)."""
    issues: list[str] = []

    _check_schema(data, issues)
    _check_fontnames(data, issues)
    _check_required_roles(data, issues)
    _check_fontscales(data, issues)
    _check_scale_count(data, issues)

    return issues


def validate_file(path: str | Path) -> list[str]:
    """Load JSON from file path, then validate."""
    filepath = Path(path)

    if not filepath.exists():
        return [f"File not found: {path}"]

    try:
        data = json.loads(filepath.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        return [f"File is not valid UTF-8: {e}"]
    except OSError as e:
        return [f"Cannot read file: {e}"]
    except json.JSONDecodeError as e:
        return [f"Invalid JSON: {e}"]

    if not isinstance(data, dict):
        return ["Root element must be a JSON object"]

    return validate_profile(data)


# --- Individual checks ---


def _check_schema(data: dict[str, Any], issues: list[str]) -> None:
    for field in REQUIRED_FIELDS:
        if field not in data:
            issues.append(f"Missing required field: '{field}'")


def _check_fontnames(data: dict[str, Any], issues: list[str]) -> None:
    """fontnames must be a list of lists of strings."""
    fontnames = data.get("fontnames")
    if fontnames is None:
        return
    if not isinstance(fontnames, list):
        issues.append("fontnames must be a list of font name lists")
        return

    for i, names in enumerate(fontnames):
        label = ROLE_NAMES[i] if i < len(ROLE_NAMES) else f"role {i}"
        if not isinstance(names, list):
            issues.append(f"fontnames[{i}] ({label}): must be a list")
            continue
        for name in names:
            if not isinstance(name, str) or not name.strip():
                issues.append(f"fontnames[{i}] ({label}): invalid font name {name!r}")


def _check_required_roles(data: dict[str, Any], issues: list[str]) -> None:
    """English and Chinese candidate lists must exist and be non-empty."""
    fontnames = data.get("fontnames")
    if not isinstance(fontnames, list):
        return

    for i, role in enumerate(REQUIRED_ROLES):
        if i >= len(fontnames):
            issues.append(f"Missing candidate list for required role '{role}'")
        elif isinstance(fontnames[i], list) and not fontnames[i]:
            issues.append(f"Candidate list for required role '{role}' is empty")


def _check_fontscales(data: dict[str, Any], issues: list[str]) -> None:
    """Every scale must be a finite positive number."""
    scales = data.get("fontscales")
    if scales is None:
        return
    if not isinstance(scales, list):
        issues.append("fontscales must be a list of numbers")
        return

    for i, scale in enumerate(scales):
        if isinstance(scale, bool) or not isinstance(scale, (int, float)):
            issues.append(f"fontscales[{i}]: not a number ({scale!r})")
        elif not math.isfinite(scale):
            issues.append(f"fontscales[{i}]: must be a finite number, got {scale}")
        elif scale <= 0:
            issues.append(f"fontscales[{i}]: must be > 0, got {scale}")


def _check_scale_count(data: dict[str, Any], issues: list[str]) -> None:
    """One scale per font size step. Sizes past the end of the list scale by 1.0."""
    scales = data.get("fontscales")
    if not isinstance(scales, list):
        return
    if len(scales) != len(FONT_SIZE_STEPS):
        issues.append(
            f"fontscales has {len(scales)} entries, expected {len(FONT_SIZE_STEPS)} "
            f"(one per size step)"
        )
