"""Property-based tests for game version extraction."""

from hypothesis import given, strategies as st

from fortnite_archive.services.versions import (
    extract_game_versions,
    from_filename_safe,
    normalize_version,
    to_filename_safe,
    version_key,
)


def seasons_with_patches(*versions: str) -> list[dict]:
    """Build a one-season list carrying the given patch versions."""
    return [{"season": 1, "patchList": [{"version": v} for v in versions]}]


version_strings = st.builds(
    lambda major, minor, build: f"{major}.{minor:02d}" + (f".{build}" if build is not None else ""),
    st.integers(min_value=0, max_value=40),
    st.integers(min_value=0, max_value=99),
    st.one_of(st.none(), st.integers(min_value=0, max_value=9999)),
)

patch_strategy = st.one_of(
    st.fixed_dictionaries({"version": version_strings}),
    st.fixed_dictionaries({"version": st.sampled_from(["beta", "", "v10.00", "10", "latest"])}),
    st.just({}),
)

season_strategy = st.fixed_dictionaries(
    {"season": st.integers(min_value=1, max_value=40)},
    optional={"patchList": st.lists(patch_strategy, max_size=6)},
)


@given(st.lists(season_strategy, max_size=8))
def test_versions_are_unique_and_numerically_sorted(seasons: list[dict]) -> None:
    """
    For any seasons list, extracted versions contain no duplicates and are
    ordered ascending by (major, minor) as integers.
    """
    versions = extract_game_versions(seasons)

    assert len(versions) == len(set(versions))
    keys = [version_key(v) for v in versions]
    assert keys == sorted(keys)


@given(st.lists(season_strategy, max_size=8))
def test_every_well_formed_patch_contributes(seasons: list[dict]) -> None:
    """Each patch with a major.minor prefix yields exactly its prefix token."""
    expected = {
        normalize_version(patch.get("version"))
        for season in seasons
        for patch in season.get("patchList", [])
    } - {None}

    assert set(extract_game_versions(seasons)) == expected


def test_duplicate_and_unordered_versions() -> None:
    seasons = seasons_with_patches("9.30", "9.01", "10.00", "9.30")

    assert extract_game_versions(seasons) == ["9.01", "9.30", "10.00"]


def test_numeric_not_lexical_ordering() -> None:
    seasons = seasons_with_patches("10.0", "9.0", "2.5")

    assert extract_game_versions(seasons) == ["2.5", "9.0", "10.0"]


def test_build_suffix_is_dropped() -> None:
    seasons = seasons_with_patches("12.41.1", "12.41.2", "12.41")

    assert extract_game_versions(seasons) == ["12.41"]


def test_malformed_versions_contribute_nothing() -> None:
    seasons = seasons_with_patches("beta", "v9.10", "", "10")
    seasons[0]["patchList"].append({"version": None})
    seasons[0]["patchList"].append({"version": 9.1})

    assert extract_game_versions(seasons) == []


def test_missing_or_empty_patch_lists_are_tolerated() -> None:
    seasons = [
        {"season": 1},
        {"season": 2, "patchList": []},
        {"season": 3, "patchList": None},
        "not a season",
        {"season": 4, "patchList": [{"version": " 4.2 "}]},
    ]

    assert extract_game_versions(seasons) == ["4.2"]


def test_empty_seasons_list() -> None:
    assert extract_game_versions([]) == []


def test_top_level_version_fields_are_candidates() -> None:
    seasons = [
        {"season": 11, "gameVersion": "11.00"},
        {"season": 12, "patchVersion": "12.00", "patchList": [{"version": "11.00"}]},
    ]

    assert extract_game_versions(seasons) == ["11.00", "12.00"]


def test_filename_safe_round_trip() -> None:
    assert to_filename_safe("9.30") == "9_30"
    assert from_filename_safe("9_30") == "9.30"


@given(st.integers(min_value=0, max_value=99), st.integers(min_value=0, max_value=99))
def test_version_key_is_numeric(major: int, minor: int) -> None:
    assert version_key(f"{major}.{minor}") == (major, minor)
