"""Shared test fixtures for style-usage."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from styleusage.store import LocalFileStore

GOLDEN_DIR = Path(__file__).parent / "golden"

POLICY_RESOURCE_TYPE = "wcm/core/components/policy/policy"


def make_policy(title: str, groups: dict[str, list[tuple[str, str, str]]] | None) -> dict[str, Any]:
    """Build a policy node; ``groups`` maps a group label to (id, label, classes) styles.

    With ``groups=None`` the policy has no cq:styleGroups child at all.
    """
    policy: dict[str, Any] = {
        "sling:resourceType": POLICY_RESOURCE_TYPE,
        "jcr:title": title,
    }
    if groups is None:
        return policy

    style_groups: dict[str, Any] = {}
    for i, (label, styles) in enumerate(groups.items()):
        style_groups[f"item{i}"] = {
            "cq:styleGroupLabel": label,
            "cq:styles": {
                f"item{j}": {
                    "cq:styleId": style_id,
                    "cq:styleLabel": style_label,
                    "cq:styleClasses": classes,
                }
                for j, (style_id, style_label, classes) in enumerate(styles)
            },
        }
    policy["cq:styleGroups"] = style_groups
    return policy


@pytest.fixture
def golden_dir() -> Path:
    return GOLDEN_DIR


@pytest.fixture
def golden_store() -> LocalFileStore:
    """Store loaded from tests/golden/repository.json."""
    return LocalFileStore.from_file(GOLDEN_DIR / "repository.json")
