from frontend.entities import Rect
from frontend.ui_config import CARD_HEIGHT, CARD_WIDTH, H_GAP, LEFT_MARGIN, TABLEAU_V_OFFSET, TABLEAU_Y, TOP_MARGIN
from klondike.Core import FOUNDATIONS, STOCK, TABLEAUS, WASTE
from klondike.Snapshot import GameSnapshot


class BoardLayout:
    """Pixel geometry of the table: where each pile sits and which card a point falls on."""

    def __init__(self, card_width=CARD_WIDTH, card_height=CARD_HEIGHT):
        self.card_width = card_width
        self.card_height = card_height
        step = card_width + H_GAP
        self.origins = {
            STOCK: (LEFT_MARGIN, TOP_MARGIN),
            WASTE: (LEFT_MARGIN + step, TOP_MARGIN),
        }
        for i, pile_id in enumerate(FOUNDATIONS):
            self.origins[pile_id] = (LEFT_MARGIN + (3 + i) * step, TOP_MARGIN)
        for i, pile_id in enumerate(TABLEAUS):
            self.origins[pile_id] = (LEFT_MARGIN + i * step, TABLEAU_Y)

    @staticmethod
    def is_fanned(pile_id):
        return pile_id in TABLEAUS

    def card_rect(self, pile_id, index):
        (x, y) = self.origins[pile_id]
        if self.is_fanned(pile_id):
            y += index * TABLEAU_V_OFFSET
        return Rect((x, y), self.card_width, self.card_height)

    def pile_rect(self, pile_id, size):
        (x, y) = self.origins[pile_id]
        height = self.card_height
        if self.is_fanned(pile_id) and size > 1:
            height += (size - 1) * TABLEAU_V_OFFSET
        return Rect((x, y), self.card_width, height)

    def card_at(self, snapshot: GameSnapshot, x, y):
        """
        Finds the card under a point.
        :return: (pile id, card index), or None
        """
        for pile_id in TABLEAUS:
            pile = snapshot.pile(pile_id)
            for i in range(pile.size() - 1, -1, -1):
                if self.card_rect(pile_id, i).contains(x, y):
                    return pile_id, i
        for pile_id in (STOCK, WASTE) + FOUNDATIONS:
            pile = snapshot.pile(pile_id)
            if pile.size() > 0 and self.card_rect(pile_id, 0).contains(x, y):
                return pile_id, pile.size() - 1
        return None

    def hits_stock(self, x, y):
        return self.card_rect(STOCK, 0).contains(x, y)

    def drop_target_at(self, snapshot: GameSnapshot, x, y):
        for pile_id in TABLEAUS + FOUNDATIONS:
            if self.pile_rect(pile_id, snapshot.pile(pile_id).size()).contains(x, y):
                return pile_id
        return None
