"""Domain models for the destination catalog."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Destination:
    """A guessable destination with its clues and reveal texts."""

    id: int
    city: str
    country: str
    clues: tuple[str, ...] = ()
    fun_facts: tuple[str, ...] = ()
    trivia: tuple[str, ...] = ()

    @property
    def label(self) -> str:
        """Return the multiple-choice label for the destination."""
        return f"{self.city}, {self.country}"

    @property
    def place(self) -> tuple[str, str]:
        return (self.city, self.country)
