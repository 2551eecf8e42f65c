"""Tests for option generation."""

import pytest

from globetrotter.domain.errors import InsufficientCatalogSizeError
from globetrotter.services.catalog import DestinationCatalog
from globetrotter.services.options import OptionGenerator
from globetrotter.services.randomness import SharedRandom
from tests.conftest import make_catalog, make_destination


def test_generate_includes_target_once_among_distinct_places(
    catalog: DestinationCatalog,
) -> None:
    generator = OptionGenerator(SharedRandom.create(seed=3))

    for target in catalog:
        options = generator.generate(target, catalog)

        assert len(options) == 4
        assert options.count(target.id) == 1
        places = {catalog.get(option_id).place for option_id in options}
        assert len(places) == 4


def test_generate_skips_destinations_sharing_the_target_place() -> None:
    catalog = DestinationCatalog.from_destinations(
        [
            make_destination(1, "Paris", "France"),
            make_destination(2, "Paris", "France"),
            make_destination(3, "Paris", "France"),
            make_destination(4, "Lyon", "France"),
            make_destination(5, "Nice", "France"),
            make_destination(6, "Rome", "Italy"),
            make_destination(7, "Rome", "Italy"),
        ]
    )
    generator = OptionGenerator(SharedRandom.create(seed=11))

    for _ in range(20):
        options = generator.generate(catalog.get(1), catalog)

        places = [catalog.get(option_id).place for option_id in options]
        assert len(set(places)) == 4
        assert places.count(("Paris", "France")) == 1
        assert 1 in options


def test_generate_uses_every_distinct_place_when_exactly_enough() -> None:
    catalog = make_catalog(4)
    generator = OptionGenerator(SharedRandom.create(seed=5))

    options = generator.generate(catalog.get(2), catalog)

    assert sorted(options) == [1, 2, 3, 4]


def test_generate_rejects_catalog_without_enough_distractors() -> None:
    catalog = DestinationCatalog.from_destinations(
        [
            make_destination(1, "Paris", "France"),
            make_destination(2, "Lyon", "France"),
            make_destination(3, "Lyon", "France"),
            make_destination(4, "Nice", "France"),
        ]
    )
    generator = OptionGenerator(SharedRandom.create(seed=1))

    with pytest.raises(InsufficientCatalogSizeError):
        generator.generate(catalog.get(1), catalog)


def test_generate_is_deterministic_for_a_seed() -> None:
    catalog = make_catalog(10)
    target = catalog.get(1)

    first = OptionGenerator(SharedRandom.create(seed=8)).generate(target, catalog)
    second = OptionGenerator(SharedRandom.create(seed=8)).generate(target, catalog)

    assert first == second


def test_shared_random_shuffled_keeps_items() -> None:
    rng = SharedRandom.create(seed=2)
    items = [1, 2, 3, 4, 5]

    shuffled = rng.shuffled(items)

    assert sorted(shuffled) == items
    assert items == [1, 2, 3, 4, 5]
