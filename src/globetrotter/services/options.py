"""Multiple-choice option generation."""

from dataclasses import dataclass

from globetrotter.domain.destinations import Destination
from globetrotter.domain.errors import InsufficientCatalogSizeError
from globetrotter.domain.sessions import OPTIONS_PER_QUESTION
from globetrotter.services.catalog import DestinationCatalog
from globetrotter.services.randomness import SharedRandom


@dataclass
class OptionGenerator:
    """Builds a shuffled option set of the target plus distinct distractors."""

    rng: SharedRandom
    option_count: int = OPTIONS_PER_QUESTION

    def generate(
        self, target: Destination, catalog: DestinationCatalog
    ) -> tuple[int, ...]:
        """Return the option destination ids, the target included exactly once."""
        pool = catalog.others(target)
        needed = self.option_count - 1
        distinct_places = {item.place for item in pool} - {target.place}
        if len(distinct_places) < needed:
            raise InsufficientCatalogSizeError(
                f"Need {needed} distinct distractors for {target.label}, "
                f"catalog offers {len(distinct_places)}"
            )

        chosen = [target]
        seen = {target.place}
        while len(chosen) < self.option_count:
            candidate = self.rng.choice(pool)
            if candidate.place in seen:
                continue
            seen.add(candidate.place)
            chosen.append(candidate)

        return tuple(item.id for item in self.rng.shuffled(chosen))
