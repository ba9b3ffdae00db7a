import logging
import random
from dataclasses import dataclass
from enum import Enum

from klondike.Snapshot import CardView, GameSnapshot, PileView

logger = logging.getLogger(__name__)

DECK_SIZE = 52
TABLEAU_COUNT = 7
FOUNDATION_COUNT = 4
ACE = 1
KING = 13

STOCK = "stock"
WASTE = "waste"
FOUNDATIONS = tuple(f"foundation{i}" for i in range(FOUNDATION_COUNT))
TABLEAUS = tuple(f"tableau{i}" for i in range(TABLEAU_COUNT))
ALL_PILES = (STOCK, WASTE) + FOUNDATIONS + TABLEAUS

# lift the top card only
TOP = None


class Suit(Enum):
    CLUBS = "clubs"
    DIAMONDS = "diamonds"
    HEARTS = "hearts"
    SPADES = "spades"

    def isRed(self):
        return self is Suit.HEARTS or self is Suit.DIAMONDS


SUIT_ORDER = tuple(Suit)


class Card:
    """
    A playing card. The id (0..51, suit-major) fixes suit and rank for the card's
    whole life; only the face orientation changes.
    """
    NUM_PER_SUIT = 13
    RANK_CODES = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")
    SUIT_CODES = "CDHS"

    __slots__ = ("_id", "faceUp")

    def __init__(self, id, faceUp=False):
        if not 0 <= id < DECK_SIZE:
            raise ValueError(f"card id out of range: {id}")
        self._id = id
        self.faceUp = faceUp

    @property
    def id(self):
        return self._id

    @property
    def suit(self) -> Suit:
        return SUIT_ORDER[self._id // Card.NUM_PER_SUIT]

    @property
    def rank(self) -> int:
        return self._id % Card.NUM_PER_SUIT + 1

    def isRed(self):
        return self.suit.isRed()

    def color(self):
        return "red" if self.isRed() else "black"

    def code(self):
        return Card.RANK_CODES[self.rank - 1] + Card.SUIT_CODES[self._id // Card.NUM_PER_SUIT]

    def __str__(self):
        if self.faceUp:
            return self.code()
        return self.code() + "*"

    def __repr__(self):
        return self.__str__()

    @staticmethod
    def fromSuitAndRank(suit: Suit, rank: int, faceUp=False):
        if not ACE <= rank <= KING:
            raise ValueError(f"rank out of range: {rank}")
        return Card(SUIT_ORDER.index(suit) * Card.NUM_PER_SUIT + rank - 1, faceUp)

    @staticmethod
    def parse(code: str, faceUp=True):
        """
        Parses a card code such as "AH", "10s" or "KD". A trailing "*" marks a face-down card.
        """
        text = code.strip().upper()
        if text.endswith("*"):
            faceUp = False
            text = text[:-1]
        if len(text) < 2:
            raise ValueError(f"invalid card code: {code!r}")
        rankText, suitText = text[:-1], text[-1]
        if rankText not in Card.RANK_CODES or suitText not in Card.SUIT_CODES:
            raise ValueError(f"invalid card code: {code!r}")
        rank = Card.RANK_CODES.index(rankText) + 1
        return Card(Card.SUIT_CODES.index(suitText) * Card.NUM_PER_SUIT + rank - 1, faceUp)


def parseCards(codes: str):
    return [Card.parse(c) for c in codes.split()]


class Deck:
    def __init__(self, cards=None):
        self.cards = list(cards) if cards is not None else Deck.generateStandardDeck()

    @staticmethod
    def generateStandardDeck():
        return [Card(i) for i in range(DECK_SIZE)]

    def shuffle(self, source: random.Random = None):
        # random.shuffle is a Fisher-Yates shuffle
        (source or random).shuffle(self.cards)

    def draw(self):
        if len(self.cards) == 0:
            return None
        return self.cards.pop()

    def isEmpty(self):
        return len(self.cards) == 0

    def __len__(self):
        return len(self.cards)


class PileKind(Enum):
    TABLEAU = "tableau"
    FOUNDATION = "foundation"
    STOCK = "stock"
    WASTE = "waste"


def pileKindOf(pileId: str) -> PileKind:
    if pileId == STOCK:
        return PileKind.STOCK
    if pileId == WASTE:
        return PileKind.WASTE
    if pileId in FOUNDATIONS:
        return PileKind.FOUNDATION
    if pileId in TABLEAUS:
        return PileKind.TABLEAU
    raise PileNotFound(pileId)


class PileNotFound(LookupError):
    def __init__(self, pileId):
        super().__init__(f"no such pile: {pileId!r}")
        self.pileId = pileId


class Pile:
    """
    An ordered stack of cards, index 0 is the bottom and the last card is the top.
    """

    def __init__(self, id: str, kind: PileKind):
        self.id = id
        self.kind = kind
        self.cards = []

    def isEmpty(self):
        return len(self.cards) == 0

    def size(self):
        return len(self.cards)

    def __len__(self):
        return len(self.cards)

    def peekTop(self):
        if len(self.cards) == 0:
            return None
        return self.cards[-1]

    def push(self, card: Card):
        self.cards.append(card)

    def pushMany(self, cards):
        self.cards.extend(cards)

    def popTop(self):
        if len(self.cards) == 0:
            return None
        return self.cards.pop()

    def popSuffixFrom(self, index: int):
        """
        Removes every card from `index` to the top and returns them bottom-to-top.
        """
        if index < 0 or index > len(self.cards):
            raise IndexError(f"cannot cut {self.id} at {index}, size is {len(self.cards)}")
        moving = self.cards[index:]
        del self.cards[index:]
        return moving

    def faceUpIndex(self):
        """
        The lowest index from which every card up to the top is face-up, or None.
        """
        idx = len(self.cards)
        while idx > 0 and self.cards[idx - 1].faceUp:
            idx -= 1
        if idx == len(self.cards):
            return None
        return idx

    def __repr__(self):
        return f"Pile({self.id}, size={len(self.cards)})"


class RejectReason(Enum):
    SAME_PILE = "SamePile"
    SOURCE_EMPTY = "SourceEmpty"
    INVALID_LIFT_INDEX = "InvalidLiftIndex"
    FACE_DOWN_CARD_NOT_LIFTABLE = "FaceDownCardNotLiftable"
    WRONG_RANK_FOR_FOUNDATION = "WrongRankForFoundation"
    WRONG_SUIT_FOR_FOUNDATION = "WrongSuitForFoundation"
    MULTI_CARD_TO_FOUNDATION = "MultiCardToFoundation"
    FOUNDATION_REQUIRES_ACE = "FoundationRequiresAce"
    TABLEAU_REQUIRES_KING = "TableauRequiresKing"
    WRONG_COLOR_FOR_TABLEAU = "WrongColorForTableau"
    WRONG_RANK_FOR_TABLEAU = "WrongRankForTableau"
    INVALID_DESTINATION_KIND = "InvalidDestinationKind"


class GameEvent:
    def perform(self, core):
        pass

    def undo(self, core):
        pass


@dataclass(frozen=True, eq=False)
class Move(GameEvent):
    """
    A committed transfer of `count` cards from the top of `source` to the top of `destination`.
    `uncovered` is the tableau card turned face-up as a side effect, if any.
    """
    source: Pile
    destination: Pile
    count: int
    uncovered: Card = None


class CardMove(Move):
    def perform(self, core):
        core.doMove(self.source, self.count, self.destination, False)

    def undo(self, core):
        core.undoMove(self)


class DrawCard(Move):
    def perform(self, core):
        core.doDraw(False)

    def undo(self, core):
        core.undoDraw(self)


class RecycleWaste(Move):
    def perform(self, core):
        core.doRecycle(False)

    def undo(self, core):
        core.undoRecycle(self)


@dataclass(frozen=True)
class MoveResult:
    accepted: bool
    reason: RejectReason = None
    uncovered: Card = None
    move: Move = None

    def __bool__(self):
        return self.accepted


@dataclass(frozen=True)
class DrawResult:
    drewCard: Card = None
    recycled: bool = False
    move: Move = None

    @property
    def performed(self):
        return self.move is not None

    def __bool__(self):
        return self.performed


@dataclass(frozen=True)
class HistoryResult:
    performed: bool
    move: Move = None

    def __bool__(self):
        return self.performed


class MoveManager:
    def __init__(self):
        self.undoHistory = []
        self.redoHistory = []

    def pushMove(self, move: Move):
        self.undoHistory.append(move)
        self.redoHistory.clear()

    def popUndo(self):
        if len(self.undoHistory) == 0:
            return None
        move = self.undoHistory.pop()
        self.redoHistory.append(move)
        return move

    def popRedo(self):
        if len(self.redoHistory) == 0:
            return None
        move = self.redoHistory.pop()
        self.undoHistory.append(move)
        return move

    def canUndo(self):
        return len(self.undoHistory) > 0

    def canRedo(self):
        return len(self.redoHistory) > 0

    def undoCount(self):
        return len(self.undoHistory)

    def redoCount(self):
        return len(self.redoHistory)

    def clear(self):
        self.undoHistory.clear()
        self.redoHistory.clear()


class GameConfig:
    def __init__(self, seed=None):
        self.seed = seed


class Core:
    """
    Klondike rules engine.

    attemptMove / drawStock / undo / redo : should be called by the front end, one at a time.
    do*** : actual pile mutation, no validation and no notification.
    """
    DEFAULT_CONFIG = GameConfig()

    def __init__(self, config: GameConfig = DEFAULT_CONFIG):
        from klondike.Interface import Interface

        self.config = config
        self.interface = Interface()
        self.piles = {}
        self.cards = ()  # every card of the current game, indexed by id
        self.history = MoveManager()
        self.seed = None
        self.gameEnded = False
        self.justRevealed = None
        self.__createPiles()

    def registerInterface(self, interface):
        self.interface = interface
        interface.core = self

    def __createPiles(self):
        self.piles = {pileId: Pile(pileId, pileKindOf(pileId)) for pileId in ALL_PILES}

    def pile(self, pileId) -> Pile:
        try:
            return self.piles[pileId]
        except KeyError:
            raise PileNotFound(pileId) from None

    @property
    def stock(self) -> Pile:
        return self.piles[STOCK]

    @property
    def waste(self) -> Pile:
        return self.piles[WASTE]

    @property
    def foundations(self):
        return [self.piles[p] for p in FOUNDATIONS]

    @property
    def tableaus(self):
        return [self.piles[p] for p in TABLEAUS]

    def newGame(self, seed=None):
        if seed is None:
            seed = self.config.seed
        if seed is None:
            seed = random.randrange(2 ** 31)
        deck = Deck()
        deck.shuffle(random.Random(seed))
        self.__createPiles()
        self.cards = tuple(sorted(deck.cards, key=lambda c: c.id))

        for i, pile in enumerate(self.tableaus):
            for row in range(i + 1):
                card = deck.draw()
                card.faceUp = row == i
                pile.push(card)
        stock = self.stock
        while not deck.isEmpty():
            card = deck.draw()
            card.faceUp = False
            stock.push(card)

        self.history.clear()
        self.seed = seed
        self.gameEnded = False
        self.justRevealed = None
        logger.info("new game dealt, seed=%s", seed)
        self.interface.onStart()

    def loadLayout(self, layout: dict):
        """
        Replaces the contents of every pile. Piles missing from `layout` become empty.
        :param layout: pile id -> list of cards, bottom first
        """
        seen = set()
        for pileId, cards in layout.items():
            pileKindOf(pileId)
            for card in cards:
                if card.id in seen:
                    raise ValueError(f"card {card.code()} appears more than once")
                seen.add(card.id)
        self.__createPiles()
        for pileId, cards in layout.items():
            self.piles[pileId].pushMany(cards)
        self.cards = tuple(sorted((c for p in self.piles.values() for c in p.cards), key=lambda c: c.id))
        self.history.clear()
        self.seed = None
        self.gameEnded = self.isWon()
        self.justRevealed = None

    def checkInvariants(self):
        seen = {}
        for pile in self.piles.values():
            for card in pile.cards:
                if card.id in seen:
                    raise AssertionError(f"{card.code()} is in both {seen[card.id]} and {pile.id}")
                seen[card.id] = pile.id
        if len(seen) != len(self.cards):
            raise AssertionError("cards were lost or created")
        for card in self.cards:
            if card.id not in seen:
                raise AssertionError(f"{card.code()} is in no pile")

    def isWon(self):
        return sum(f.size() for f in self.foundations) == DECK_SIZE

    def checkWin(self):
        if self.gameEnded or not self.isWon():
            return False
        self.gameEnded = True
        logger.info("game won, seed=%s", self.seed)
        self.interface.onWin()
        return True

    def canUndo(self):
        return self.history.canUndo()

    def canRedo(self):
        return self.history.canRedo()

    def liftableIndex(self, pileId):
        return self.pile(pileId).faceUpIndex()

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(piles=tuple(
            PileView(
                id=pile.id,
                kind=pile.kind.value,
                cards=tuple(CardView(id=c.id, suit=c.suit.value, rank=c.rank, faceUp=c.faceUp) for c in pile.cards),
            )
            for pile in self.piles.values()
        ))

    @staticmethod
    def checkMove(source: Pile, lift, destination: Pile):
        """
        Validates lifting the cards from index `lift` (or the top card when `lift` is TOP)
        of `source` onto `destination`.

        Only the bottom card of the lifted group is checked against the destination; the
        group itself is not required to be a descending alternating-color run.
        Only a tableau source may lift more than its top card.
        :return: the RejectReason, or None if the move is legal
        """
        if source is destination:
            return RejectReason.SAME_PILE
        if source.isEmpty():
            return RejectReason.SOURCE_EMPTY
        index = source.size() - 1 if lift is TOP else lift
        if index < 0 or index >= source.size():
            return RejectReason.INVALID_LIFT_INDEX
        for card in source.cards[index:]:
            if not card.faceUp:
                return RejectReason.FACE_DOWN_CARD_NOT_LIFTABLE

        first = source.cards[index]
        count = source.size() - index
        if count > 1 and source.kind is not PileKind.TABLEAU:
            # only a tableau gives up more than its top card
            if destination.kind is PileKind.FOUNDATION:
                return RejectReason.MULTI_CARD_TO_FOUNDATION
            return RejectReason.INVALID_LIFT_INDEX
        top = destination.peekTop()
        if destination.kind is PileKind.FOUNDATION:
            if count != 1:
                return RejectReason.MULTI_CARD_TO_FOUNDATION
            if top is None:
                return None if first.rank == ACE else RejectReason.FOUNDATION_REQUIRES_ACE
            if first.suit is not top.suit:
                return RejectReason.WRONG_SUIT_FOR_FOUNDATION
            if first.rank != top.rank + 1:
                return RejectReason.WRONG_RANK_FOR_FOUNDATION
            return None
        if destination.kind is PileKind.TABLEAU:
            if top is None:
                return None if first.rank == KING else RejectReason.TABLEAU_REQUIRES_KING
            if first.isRed() == top.isRed():
                return RejectReason.WRONG_COLOR_FOR_TABLEAU
            if first.rank != top.rank - 1:
                return RejectReason.WRONG_RANK_FOR_TABLEAU
            return None
        return RejectReason.INVALID_DESTINATION_KIND

    def attemptMove(self, sourceId, lift, destinationId) -> MoveResult:
        source = self.pile(sourceId)
        destination = self.pile(destinationId)
        reason = Core.checkMove(source, lift, destination)
        if reason is not None:
            logger.debug("rejected %s[%s] -> %s: %s", sourceId, lift, destinationId, reason.value)
            return MoveResult(accepted=False, reason=reason)
        index = source.size() - 1 if lift is TOP else lift
        move = self.doMove(source, source.size() - index, destination)
        self.justRevealed = move.uncovered
        self.interface.onEvent(move)
        self.checkWin()
        return MoveResult(accepted=True, uncovered=move.uncovered, move=move)

    def drawStock(self) -> DrawResult:
        if not self.stock.isEmpty():
            move = self.doDraw()
            card = self.waste.peekTop()
            self.justRevealed = card
            self.interface.onEvent(move)
            return DrawResult(drewCard=card, move=move)
        if not self.waste.isEmpty():
            move = self.doRecycle()
            self.justRevealed = None
            self.interface.onEvent(move)
            return DrawResult(recycled=True, move=move)
        logger.debug("stock and waste are both empty")
        return DrawResult()

    def undo(self) -> HistoryResult:
        move = self.history.popUndo()
        if move is None:
            logger.debug("nothing to undo")
            return HistoryResult(performed=False)
        move.undo(self)
        self.justRevealed = None
        self.gameEnded = self.isWon()
        logger.debug("undone %s", move)
        self.interface.onUndoEvent(move)
        return HistoryResult(performed=True, move=move)

    def redo(self) -> HistoryResult:
        move = self.history.popRedo()
        if move is None:
            logger.debug("nothing to redo")
            return HistoryResult(performed=False)
        move.perform(self)
        if isinstance(move, DrawCard):
            self.justRevealed = self.waste.peekTop()
        else:
            self.justRevealed = move.uncovered
        logger.debug("redone %s", move)
        self.interface.onEvent(move)
        self.checkWin()
        return HistoryResult(performed=True, move=move)

    def doMove(self, source: Pile, count: int, destination: Pile, doLog=True):
        destination.pushMany(source.popSuffixFrom(source.size() - count))
        uncovered = None
        if source.kind is PileKind.TABLEAU:
            top = source.peekTop()
            if top is not None and not top.faceUp:
                top.faceUp = True
                uncovered = top
        move = CardMove(source, destination, count, uncovered)
        if doLog:
            self.history.pushMove(move)
        logger.debug("moved %d card(s) %s -> %s, uncovered=%s", count, source.id, destination.id, uncovered)
        return move

    def doDraw(self, doLog=True):
        card = self.stock.popTop()
        card.faceUp = True
        self.waste.push(card)
        move = DrawCard(self.stock, self.waste, 1)
        if doLog:
            self.history.pushMove(move)
        logger.debug("drew %s", card)
        return move

    def doRecycle(self, doLog=True):
        waste = self.waste
        stock = self.stock
        count = waste.size()
        while not waste.isEmpty():
            card = waste.popTop()
            card.faceUp = False
            stock.push(card)
        move = RecycleWaste(waste, stock, count)
        if doLog:
            self.history.pushMove(move)
        logger.debug("recycled %d card(s) from waste to stock", count)
        return move

    def undoMove(self, move: CardMove):
        destination = move.destination
        move.source.pushMany(destination.popSuffixFrom(destination.size() - move.count))
        if move.uncovered is not None:
            move.uncovered.faceUp = False

    def undoDraw(self, move: DrawCard):
        card = move.destination.popTop()
        card.faceUp = False
        move.source.push(card)

    def undoRecycle(self, move: RecycleWaste):
        stock = move.destination
        waste = move.source
        for _ in range(move.count):
            card = stock.popTop()
            card.faceUp = True
            waste.push(card)
