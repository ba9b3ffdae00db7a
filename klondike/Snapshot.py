from dataclasses import dataclass


@dataclass(frozen=True)
class CardView:
    id: int
    suit: str
    rank: int
    faceUp: bool


@dataclass(frozen=True)
class PileView:
    id: str
    kind: str
    cards: tuple[CardView, ...]

    def size(self):
        return len(self.cards)

    def top(self):
        if len(self.cards) == 0:
            return None
        return self.cards[-1]


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only copy of every pile, for rendering."""
    piles: tuple[PileView, ...]

    def pile(self, pileId) -> PileView:
        for p in self.piles:
            if p.id == pileId:
                return p
        raise KeyError(pileId)

    def ofKind(self, kind: str):
        return tuple(p for p in self.piles if p.kind == kind)

    def cardCount(self):
        return sum(len(p.cards) for p in self.piles)

    @property
    def won(self):
        return sum(len(p.cards) for p in self.ofKind("foundation")) == 52
