"""Per-card revealed state for the current flashcard deck."""
from typing import FrozenSet, Sequence, Set, Tuple

from studyai.api.schemas import Flashcard
from studyai.exceptions import InvalidFlashcardIndexError


class FlashcardFlipTracker:
    """Tracks which flashcards currently show their back side."""

    def __init__(self):
        self._cards: Tuple[Flashcard, ...] = ()
        self._revealed: Set[int] = set()

    def load(self, cards: Sequence[Flashcard]) -> None:
        """Install a new deck; every card starts face up on its front."""
        self._cards = tuple(cards)
        self._revealed.clear()

    def clear(self) -> None:
        """Drop the deck and all revealed state."""
        self.load(())

    def toggle(self, index: int) -> bool:
        """
        Flip a card.

        Args:
            index: Position of the card in the deck

        Returns:
            True if the card now shows its back, False otherwise

        Raises:
            InvalidFlashcardIndexError: If index is outside the deck
        """
        self._check_index(index)
        if index in self._revealed:
            self._revealed.remove(index)
            return False
        self._revealed.add(index)
        return True

    def is_revealed(self, index: int) -> bool:
        self._check_index(index)
        return index in self._revealed

    def visible_face(self, index: int) -> str:
        """Text currently shown for the card at index."""
        card = self._cards[self._check_index(index)]
        return card.back if index in self._revealed else card.front

    @property
    def revealed(self) -> FrozenSet[int]:
        return frozenset(self._revealed)

    def __len__(self) -> int:
        return len(self._cards)

    def _check_index(self, index: int) -> int:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._cards):
            raise InvalidFlashcardIndexError(
                f"Flashcard index {index!r} out of range for a deck of {len(self._cards)}"
            )
        return index
