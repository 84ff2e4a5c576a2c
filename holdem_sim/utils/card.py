"""Card and Deck classes for poker."""

from __future__ import annotations

import random
from dataclasses import dataclass

from holdem_sim.utils.constants import RANK_VALUES, RED_SUITS, SUIT_SYMBOLS, Rank, Suit


@dataclass(frozen=True)
class Card:
    """Represents a single playing card."""

    rank: Rank
    suit: Suit

    @classmethod
    def from_str(cls, s: str) -> Card:
        """Create a Card from a 2-character string like 'Ah' or 'Td'.

        A leading '10' is accepted as an alias for 'T'.

        Raises:
            ValueError: If the string is not a valid card.
        """
        s = s.strip()
        if s.startswith("10"):
            s = "T" + s[2:]
        if len(s) != 2:
            raise ValueError(f"Card string must be 2 characters, got '{s}'")
        try:
            rank = Rank(s[0].upper())
        except ValueError:
            raise ValueError(f"Invalid rank character: '{s[0]}'")
        try:
            suit = Suit(s[1].lower())
        except ValueError:
            raise ValueError(f"Invalid suit character: '{s[1]}'")
        return cls(rank=rank, suit=suit)

    @property
    def value(self) -> int:
        """Numeric value of the card's rank (2-14)."""
        return RANK_VALUES[self.rank]

    @property
    def symbol(self) -> str:
        """Display form with a suit glyph, e.g. 'A♠'."""
        return f"{self.rank.value}{SUIT_SYMBOLS[self.suit]}"

    @property
    def is_red(self) -> bool:
        return self.suit in RED_SUITS

    def __str__(self) -> str:
        return f"{self.rank.value}{self.suit.value}"

    def __repr__(self) -> str:
        return f"Card('{self}')"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.rank == other.rank and self.suit == other.suit

    def __hash__(self) -> int:
        return hash((self.rank, self.suit))


def parse_cards(s: str) -> list[Card]:
    """Parse 'Ah Ks Td' or 'AhKsTd' into a list of cards."""
    s = s.strip()
    if not s:
        return []
    if " " in s:
        return [Card.from_str(c) for c in s.split()]
    if len(s) % 2 != 0:
        raise ValueError(f"Cannot split '{s}' into 2-character cards")
    return [Card.from_str(s[i:i + 2]) for i in range(0, len(s), 2)]


def all_cards() -> list[Card]:
    """Return all 52 cards in suit-major order."""
    return [Card(rank=rank, suit=suit) for suit in Suit for rank in Rank]


def fisher_yates_shuffle(cards: list[Card], rng: random.Random) -> None:
    """Shuffle cards in place.

    Walks i from the last index down to 1 and swaps i with a uniform j in [0, i].
    """
    for i in range(len(cards) - 1, 0, -1):
        j = rng.randint(0, i)
        cards[i], cards[j] = cards[j], cards[i]


def create_shuffled_deck(rng: random.Random | None = None) -> list[Card]:
    """Return all 52 distinct cards in uniformly random order."""
    cards = all_cards()
    fisher_yates_shuffle(cards, rng or random.Random())
    return cards


class Deck:
    """Standard 52-card deck dealt from its end."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self._cards: list[Card] = []
        self.reset()

    def reset(self) -> None:
        """Rebuild and shuffle the deck."""
        self._cards = create_shuffled_deck(self._rng)

    def deal(self, n: int = 1) -> list[Card]:
        """Deal n cards, removing them from the deck.

        Raises:
            ValueError: If not enough cards remain.
        """
        if n > self.remaining:
            raise ValueError(
                f"Cannot deal {n} cards, only {self.remaining} remaining"
            )
        return [self._cards.pop() for _ in range(n)]

    @property
    def remaining(self) -> int:
        """Number of cards remaining in the deck."""
        return len(self._cards)

    def remove(self, cards: list[Card]) -> None:
        """Take cards that are already in play out of the deck.

        Raises:
            ValueError: If a card is not in the deck.
        """
        for card in cards:
            if card not in self._cards:
                raise ValueError(f"Card {card} not in deck")
            self._cards.remove(card)
