"""Header keyword profiles used to bind spreadsheet fields to column roles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Tuple


ROLES: Tuple[str, ...] = ("team", "position", "salary", "name")
REQUIRED_ROLES: Tuple[str, ...] = ("team", "position", "salary")


@dataclass(frozen=True)
class ColumnKeywords:
    key: str
    label: str
    team: Tuple[str, ...]
    position: Tuple[str, ...]
    salary: Tuple[str, ...]
    name: Tuple[str, ...]

    def for_role(self, role: str) -> Tuple[str, ...]:
        if role not in ROLES:
            raise KeyError(f"Unknown column role {role!r}")
        return getattr(self, role)


_JA = ColumnKeywords(
    key="ja",
    label="Japanese headers",
    team=("チーム",),
    position=("ポジション",),
    salary=("年俸",),
    name=("選手名",),
)

_EN = ColumnKeywords(
    key="en",
    label="English headers",
    team=("team", "club"),
    position=("position",),
    salary=("salary", "wage"),
    name=("player name", "player"),
)


def _merge(key: str, label: str, profiles: Iterable[ColumnKeywords]) -> ColumnKeywords:
    merged: Dict[str, Tuple[str, ...]] = {role: () for role in ROLES}
    for profile in profiles:
        for role in ROLES:
            merged[role] = merged[role] + profile.for_role(role)
    return ColumnKeywords(key=key, label=label, **merged)


_KEYWORD_PROFILES: Dict[str, ColumnKeywords] = {
    "auto": _merge("auto", "Japanese or English headers", (_JA, _EN)),
    "ja": _JA,
    "en": _EN,
}

DEFAULT_PROFILE = "auto"


def iter_keywords() -> Iterable[ColumnKeywords]:
    """Return an iterator of all configured keyword profiles."""

    return _KEYWORD_PROFILES.values()


def get_keywords(profile: str = DEFAULT_PROFILE) -> ColumnKeywords:
    """Fetch a keyword profile by key, raising KeyError if missing."""

    key = profile.lower()
    if key not in _KEYWORD_PROFILES:
        raise KeyError(f"No column keywords configured for profile={profile!r}")
    return _KEYWORD_PROFILES[key]


PROFILE_CHOICES: Mapping[str, str] = {
    profile.key: profile.label for profile in _KEYWORD_PROFILES.values()
}
