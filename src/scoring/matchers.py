"""Token matching utilities for Fit Scoring."""

from __future__ import annotations

import re


def normalize_skill(skill: str) -> str:
    """Normalize a skill string for comparison.

    Performs lowercasing, whitespace normalization, and trims common
    surrounding punctuation while preserving meaningful characters
    like "+", "#", and "." (e.g. "C++", "C#", "Node.js").
    """
    value = str(skill).strip().lower()
    value = re.sub(r"\s+", " ", value)
    return value.strip(" ,;")


def normalize_label(value: str | None) -> str:
    """Normalize a free-text label (industry, job type, location)."""
    if value is None:
        return ""
    return re.sub(r"\s+", " ", str(value)).strip().lower()


def find_matching_skills(
    required: list[str], available: set[str] | frozenset[str]
) -> tuple[list[str], list[str]]:
    """Return the subset of required skills that match, and those missing.

    `available` must already hold normalized tokens. Required skills keep
    their original spelling and first-seen order; duplicates are dropped.
    """
    matched: list[str] = []
    missing: list[str] = []
    seen: set[str] = set()

    for requirement in required:
        token = normalize_skill(requirement)
        if not token or token in seen:
            continue
        seen.add(token)
        if token in available:
            matched.append(requirement)
        else:
            missing.append(requirement)

    return matched, missing


def credential_satisfies(candidate: str, required: str) -> bool:
    """Return True if a held credential satisfies a required one.

    A credential satisfies a requirement when either normalized string
    contains the other ("BSc Computer Science" satisfies "bsc").
    """
    held = normalize_label(candidate)
    wanted = normalize_label(required)
    if not held or not wanted:
        return False
    return wanted in held or held in wanted
