from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Hashable, Optional

import pytest

from schedgraph.predicates import (
    CratePrefixFilter,
    SingleAmbiguityFilter,
    filter_in_crate,
    filter_in_crates,
    without_single_ambiguities_on,
)


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FakeSystem:
    name: str


class FakeWorld:
    """
    Data store fake mapping component ids to types.

    Ids listed in `broken` raise KeyError, mimicking a store that fails
    to resolve a stale id.
    """

    def __init__(self, types: dict[Hashable, Optional[type]], broken: tuple = ()) -> None:
        self.types = types
        self.broken = set(broken)
        self.lookups: list[Hashable] = []

    def component_type(self, component_id: Hashable) -> Optional[type]:
        self.lookups.append(component_id)
        if component_id in self.broken:
            raise KeyError(component_id)
        return self.types.get(component_id)


class Transform:
    pass


class Velocity:
    pass


class Name:
    pass


TRANSFORM, VELOCITY, NAME, UNTYPED = 0, 1, 2, 3

A = FakeSystem("game::physics::integrate")
B = FakeSystem("game::render::draw")


@pytest.fixture
def world() -> FakeWorld:
    return FakeWorld({TRANSFORM: Transform, VELOCITY: Velocity, NAME: Name, UNTYPED: None})


# ---------------------------------------------------------------------------
# Inclusion
# ---------------------------------------------------------------------------


def test_filter_in_crate_is_plain_prefix_match() -> None:
    predicate = filter_in_crate("game::physics")

    assert predicate(FakeSystem("game::physics"))
    assert predicate(FakeSystem("game::physics::integrate"))
    assert predicate(FakeSystem("game::physicsx::step"))
    assert not predicate(FakeSystem("game::render::draw"))
    assert not predicate(FakeSystem("Game::physics::integrate"))
    assert not predicate(FakeSystem("my_game::physics::integrate"))


def test_filter_in_crate_has_no_pattern_syntax() -> None:
    predicate = filter_in_crate("game::*")

    assert not predicate(FakeSystem("game::physics"))
    assert predicate(FakeSystem("game::*::literal"))


def test_filter_in_crates_matches_any_prefix() -> None:
    predicate = filter_in_crates(["game::physics", "game::ai"])

    assert predicate(FakeSystem("game::physics::integrate"))
    assert predicate(FakeSystem("game::ai::plan"))
    assert not predicate(FakeSystem("game::render::draw"))


def test_filter_in_crates_empty_matches_nothing() -> None:
    predicate = filter_in_crates([])

    assert not predicate(FakeSystem("game::physics::integrate"))
    assert not predicate(FakeSystem(""))


def test_filter_in_crates_rejects_bare_string() -> None:
    with pytest.raises(TypeError):
        filter_in_crates("game")


def test_prefix_filters_compare_by_value() -> None:
    assert filter_in_crate("game") == CratePrefixFilter(prefixes=("game",))
    assert filter_in_crates(iter(["a", "b"])) == CratePrefixFilter(prefixes=("a", "b"))


# ---------------------------------------------------------------------------
# Ambiguities
# ---------------------------------------------------------------------------


def test_single_ambiguity_on_listed_type_is_hidden(world: FakeWorld) -> None:
    predicate = without_single_ambiguities_on([Transform])

    assert predicate(A, B, [TRANSFORM], world) is False


def test_multiple_conflicts_are_never_hidden(world: FakeWorld) -> None:
    predicate = without_single_ambiguities_on([Transform])

    assert predicate(A, B, [TRANSFORM, VELOCITY], world) is True
    # only the single-conflict case consults the data store
    assert world.lookups == []


def test_multiple_conflicts_all_listed_are_still_reported(world: FakeWorld) -> None:
    predicate = without_single_ambiguities_on([Transform, Velocity])

    assert predicate(A, B, [TRANSFORM, VELOCITY], world) is True


def test_zero_conflicts_are_reported(world: FakeWorld) -> None:
    predicate = without_single_ambiguities_on([Transform])

    assert predicate(A, B, [], world) is True


def test_single_conflict_on_other_type_is_reported(world: FakeWorld) -> None:
    predicate = without_single_ambiguities_on([Transform, Name])

    assert predicate(A, B, [VELOCITY], world) is True
    assert predicate(A, B, [NAME], world) is False


def test_unresolved_component_is_reported(world: FakeWorld) -> None:
    predicate = without_single_ambiguities_on([Transform])

    assert predicate(A, B, [UNTYPED], world) is True
    assert predicate(A, B, [999], world) is True


def test_lookup_error_from_store_is_reported() -> None:
    world = FakeWorld({TRANSFORM: Transform}, broken=(TRANSFORM,))
    predicate = without_single_ambiguities_on([Transform])

    assert predicate(A, B, [TRANSFORM], world) is True


def test_subclass_does_not_match_listed_type(world: FakeWorld) -> None:
    class Special(Transform):
        pass

    world.types[TRANSFORM] = Special
    predicate = without_single_ambiguities_on([Transform])

    assert predicate(A, B, [TRANSFORM], world) is True


def test_single_ambiguity_filter_captures_frozen_types() -> None:
    types = [Transform]
    predicate = without_single_ambiguities_on(types)
    types.append(Velocity)

    assert predicate == SingleAmbiguityFilter(types=frozenset({Transform}))


def test_predicates_are_repeatable_across_threads(world: FakeWorld) -> None:
    """Same inputs give the same answer regardless of call order or thread."""
    include = filter_in_crates(["game::physics"])
    ambiguity = without_single_ambiguities_on([Transform])

    results: list[tuple[bool, bool, bool]] = []
    lock = threading.Lock()

    def evaluate() -> None:
        for _ in range(100):
            outcome = (
                include(A),
                ambiguity(A, B, [TRANSFORM], world),
                ambiguity(A, B, [TRANSFORM, VELOCITY], world),
            )
            with lock:
                results.append(outcome)

    threads = [threading.Thread(target=evaluate) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 400
    assert set(results) == {(True, False, True)}
