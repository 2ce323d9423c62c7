"""Chunking profiles from static.json: named strategy + options pairs, one of them active."""

import json
from pathlib import Path
from typing import NamedTuple

from docchunk.config.chunking.models import ChunkingProfile, ChunkingStrategy

STATIC_PATH = Path(__file__).resolve().parent / "static.json"
ACTIVE_PROFILE = "active"


class ProfileCatalog(NamedTuple):
    active: str
    profiles: dict[str, ChunkingProfile]


_catalog: ProfileCatalog | None = None


def read_profile_catalog(path: Path = STATIC_PATH) -> ProfileCatalog:
    """
    Parse and validate a profile file. The active profile must exist and every
    ChunkingStrategy must be served by at least one profile; otherwise ValueError.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    profiles = {name: ChunkingProfile.model_validate(raw) for name, raw in data.get("profiles", {}).items()}
    active = data.get("active", "default")
    if active not in profiles:
        raise ValueError(f"Active chunking profile {active!r} is not defined in {path.name}")
    covered = {profile.strategy for profile in profiles.values()}
    missing = [strategy.value for strategy in ChunkingStrategy if strategy not in covered]
    if missing:
        raise ValueError(f"{path.name} has no profile for strategies: {', '.join(missing)}")
    return ProfileCatalog(active=active, profiles=profiles)


def _get_catalog() -> ProfileCatalog:
    global _catalog
    if _catalog is None:
        _catalog = read_profile_catalog()
    return _catalog


def load_chunking_profiles() -> dict[str, ChunkingProfile]:
    return _get_catalog().profiles


def get_chunking_profile(profile_name: str) -> ChunkingProfile | None:
    return load_chunking_profiles().get(profile_name)


def get_active_chunking_profile() -> ChunkingProfile:
    catalog = _get_catalog()
    return catalog.profiles[catalog.active]


def profile_for_strategy(strategy: ChunkingStrategy | str) -> ChunkingProfile:
    """Profile named after the strategy, else the first one that uses it. ValueError for unknown strategies."""
    strategy = ChunkingStrategy(strategy)
    profiles = load_chunking_profiles()
    named = profiles.get(strategy.value)
    if named is not None and named.strategy == strategy:
        return named
    return next(profile for profile in profiles.values() if profile.strategy == strategy)


def resolve_chunking_profile(profile_name: str, inline_config: dict | None = None) -> ChunkingProfile:
    """
    A non-empty inline_config is validated and wins. "active" is the profile marked
    active in static.json; any other name must exist or ValueError is raised.
    """
    if inline_config:
        return ChunkingProfile.model_validate(inline_config)
    if profile_name == ACTIVE_PROFILE:
        return get_active_chunking_profile()
    profile = get_chunking_profile(profile_name)
    if profile is None:
        raise ValueError(f"Unknown chunking profile: {profile_name!r}")
    return profile
