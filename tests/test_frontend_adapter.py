import unittest
from unittest.mock import MagicMock

from frontend.adapter import PILE_IDS_BY_SHORT_NAME, PILE_SHORT_NAMES, CoreAdapter
from frontend.card_face import CardFaceRenderer
from frontend.ui_config import SUIT_SYMBOLS, THEME
from klondike.Core import FOUNDATIONS, STOCK, TABLEAUS, WASTE, Card, CardMove, Core, DrawCard, Pile, PileKind, RecycleWaste, Suit
from klondike.Snapshot import CardView


class CoreAdapterTestCase(unittest.TestCase):
    def test_event_mapping(self):
        stock = Pile(STOCK, PileKind.STOCK)
        waste = Pile(WASTE, PileKind.WASTE)
        t0 = Pile(TABLEAUS[0], PileKind.TABLEAU)
        t1 = Pile(TABLEAUS[1], PileKind.TABLEAU)

        move_evt = CoreAdapter.event_to_animation(CardMove(t0, t1, 2, Card(5, True)))
        draw_evt = CoreAdapter.event_to_animation(DrawCard(stock, waste, 1))
        recycle_evt = CoreAdapter.event_to_animation(RecycleWaste(waste, stock, 9))
        undo_evt = CoreAdapter.event_to_animation(CardMove(t0, t1, 1), undone=True)

        self.assertEqual("MOVE", move_evt.type)
        self.assertEqual({"src": "tableau0", "dest": "tableau1", "count": 2, "uncovered": 5}, move_evt.payload)
        self.assertEqual("DRAW", draw_evt.type)
        self.assertEqual("RECYCLE", recycle_evt.type)
        self.assertEqual(9, recycle_evt.payload["count"])
        self.assertEqual("UNDO_MOVE", undo_evt.type)
        self.assertNotIn("uncovered", undo_evt.payload)
        self.assertEqual("UNKNOWN", CoreAdapter.event_to_animation(object()).type)

    def test_short_names_cover_every_pile(self):
        self.assertEqual(13, len(PILE_SHORT_NAMES))
        self.assertEqual(STOCK, PILE_IDS_BY_SHORT_NAME["s"])
        self.assertEqual(FOUNDATIONS[2], PILE_IDS_BY_SHORT_NAME["f2"])
        self.assertEqual(TABLEAUS[6], PILE_IDS_BY_SHORT_NAME["t6"])

    def test_board_lines_show_deal(self):
        core = Core()
        core.newGame(3)
        lines = CoreAdapter.board_lines(core.snapshot())
        self.assertTrue(lines[0].startswith("s:[24]"))
        self.assertIn("t6", lines[2])
        # header, blank, column names, then the seven rows of the deepest tableau
        self.assertEqual(3 + 7, len(lines))
        self.assertEqual(6, lines[3].count("---"))
        self.assertEqual(0, lines[-1].count("---"))


class CardFaceTestCase(unittest.TestCase):
    def test_labels(self):
        renderer = CardFaceRenderer()
        self.assertEqual("A♥", renderer.label(CardView(id=26, suit="hearts", rank=1, faceUp=True)))
        self.assertEqual("10♣", renderer.label(CardView(id=9, suit="clubs", rank=10, faceUp=True)))
        self.assertEqual("---", renderer.label(CardView(id=9, suit="clubs", rank=10, faceUp=False)))

    def test_colors_match_every_suit(self):
        renderer = CardFaceRenderer()
        self.assertEqual(THEME["red"], renderer.text_color("diamonds"))
        self.assertEqual(THEME["black"], renderer.text_color("spades"))
        with self.assertRaises(KeyError):
            renderer.text_color("stars")

    def test_suit_tables_cover_every_suit(self):
        renderer = CardFaceRenderer()
        self.assertEqual({s.value for s in Suit}, set(SUIT_SYMBOLS))
        for suit in Suit:
            expected = THEME["red"] if suit.isRed() else THEME["black"]
            self.assertEqual(expected, renderer.text_color(suit.value))

    def test_draw_card_uses_back_for_face_down(self):
        renderer = CardFaceRenderer()
        canvas = MagicMock()
        renderer.draw_card(canvas, 0, 0, CardView(id=0, suit="clubs", rank=1, faceUp=False), 80, 110)
        texts = [call.kwargs.get("text") for call in canvas.create_text.call_args_list]
        self.assertNotIn("A♣", texts)

        canvas = MagicMock()
        renderer.draw_card(canvas, 0, 0, CardView(id=0, suit="clubs", rank=1, faceUp=True), 80, 110)
        texts = [call.kwargs.get("text") for call in canvas.create_text.call_args_list]
        self.assertIn("A♣", texts)


if __name__ == "__main__":
    unittest.main()
