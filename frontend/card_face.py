from frontend.ui_config import RANK_LABELS, RED_SUITS, SUIT_SYMBOLS, THEME
from klondike.Snapshot import CardView


class CardFaceRenderer:
    def suit_symbol(self, suit: str) -> str:
        return SUIT_SYMBOLS[suit]

    def rank_label(self, rank: int) -> str:
        return RANK_LABELS[rank - 1]

    def label(self, card: CardView) -> str:
        if not card.faceUp:
            return "---"
        return f"{self.rank_label(card.rank)}{self.suit_symbol(card.suit)}"

    def text_color(self, suit: str) -> str:
        if suit not in SUIT_SYMBOLS:
            raise KeyError(suit)
        return THEME["red"] if suit in RED_SUITS else THEME["black"]

    def draw_slot(self, canvas, x, y, cw, ch, caption=""):
        canvas.create_rectangle(x, y, x + cw, y + ch, outline=THEME["slot_outline"], width=2)
        if caption:
            canvas.create_text(x + cw * 0.5, y + ch * 0.5, text=caption, fill=THEME["slot_outline"], font="Serif 18")

    def draw_card(self, canvas, x, y, card: CardView, cw, ch, selected=False, card_style="Classic", show_back=False):
        outline = THEME["card_select"] if selected else THEME["card_border"]
        width = 3 if selected else 1
        if show_back or not card.faceUp:
            canvas.create_rectangle(x, y, x + cw, y + ch, fill=THEME["card_back"], outline=outline, width=width)
            self.draw_card_back_pattern(canvas, x, y, cw, ch, card_style)
            return

        canvas.create_rectangle(x, y, x + cw, y + ch, fill=THEME["card_front"], outline=outline, width=width)
        rank = self.rank_label(card.rank)
        suit_text = self.suit_symbol(card.suit)
        color = self.text_color(card.suit)
        if card_style == "Minimal":
            canvas.create_text(x + cw * 0.5, y + ch * 0.42, text=rank, fill=color, font="Helvetica 20 bold")
            canvas.create_text(x + cw * 0.5, y + ch * 0.68, text=suit_text, fill=color, font="Helvetica 14")
        else:
            canvas.create_text(x + 6, y + 6, anchor="nw", text=f"{rank}{suit_text}", fill=color, font="Helvetica 12 bold")
            canvas.create_text(x + cw - 6, y + ch - 6, anchor="se", text=f"{rank}{suit_text}", fill=color, font="Helvetica 12 bold")
            canvas.create_text(x + cw * 0.5, y + ch * 0.52, text=suit_text, fill=color, font="Helvetica 26 bold")

    def draw_card_back_pattern(self, canvas, x, y, cw, ch, card_style):
        if card_style == "Minimal":
            canvas.create_rectangle(x + 8, y + 8, x + cw - 8, y + ch - 8, outline=THEME["back_pattern"], width=2)
            return
        for i in range(4):
            yy = y + 12 + i * (ch - 24) / 3
            canvas.create_line(x + 10, yy, x + cw - 10, yy, fill=THEME["back_pattern"], width=1)
        canvas.create_text(x + cw * 0.5, y + ch * 0.5, text="✦", fill=THEME["back_pattern"], font="Serif 20 bold")
