import argparse
from tkinter import ALL, CENTER, Canvas, Tk, W, messagebox

from frontend.adapter import CoreAdapter
from frontend.card_face import CardFaceRenderer
from frontend.entities import DragState, FlipState
from frontend.layout import BoardLayout
from frontend.logging_utils import get_logger, setup_logging
from frontend.settings_store import game_config, load_settings
from frontend.ui_config import FLIP_SHOW_FACE_STEP, FLIP_STEP_MS, FLIP_STEPS, TABLEAU_V_OFFSET, THEME
from klondike.Core import FOUNDATIONS, STOCK, TABLEAUS, WASTE, Core
from klondike.Interface import Interface

logger = get_logger(__name__)


class TkInterface(Interface):

    def __init__(self, width=1024, height=720, card_style="Classic"):
        super().__init__()
        self.width = width
        self.height = height
        self.card_style = card_style
        self.canvas: Canvas = None
        self.root = None
        self.layout = BoardLayout()
        self.renderer = CardFaceRenderer()
        self.drag: DragState = None
        self.flip: FlipState = None
        self.hasWon = False

    def run(self):
        root = Tk()
        root.title("Klondike Solitaire")
        self.root = root
        canvas = Canvas(root, width=self.width, height=self.height)
        canvas.configure(bd=0, highlightthickness=0)
        canvas.pack(expand=1, fill="both")
        self.canvas = canvas
        root.bind("<Button-1>", self.mousePressed)
        root.bind("<B1-Motion>", self.mouseMoved)
        root.bind("<ButtonRelease-1>", self.mouseReleased)
        root.bind("<Key>", self.keyPressed)
        root.bind("<Configure>", self.resize)
        self.core.newGame()
        root.mainloop()

    def resize(self, event):
        if event.widget != self.root:
            return
        self.width = event.width
        self.height = event.height
        self.redrawAll()

    def onStart(self):
        self.drag = None
        self.flip = None
        self.hasWon = False
        super().onStart()

    def onEvent(self, event):
        animation = CoreAdapter.event_to_animation(event)
        if animation.type == "DRAW":
            self.startFlip(self.core.waste.peekTop().id, WASTE)
        elif "uncovered" in animation.payload:
            self.startFlip(animation.payload["uncovered"], animation.payload["src"])
        super().onEvent(event)

    def onUndoEvent(self, event):
        animation = CoreAdapter.event_to_animation(event, undone=True)
        if animation.type == "UNRECYCLE":
            self.startFlip(self.core.waste.peekTop().id, WASTE)
        else:
            self.flip = None
        self.hasWon = False
        super().onUndoEvent(event)

    def notifyRedraw(self):
        if self.canvas is None:
            return
        self.canvas.after(0, self.redrawAll)

    def onWin(self):
        self.hasWon = True
        self.redrawAll()
        messagebox.showinfo("You Win", "Every card is home. Press n for a new game.")

    def startFlip(self, card_id, pile_id):
        if self.canvas is None:
            return
        self.flip = FlipState(card_id=card_id, pile_id=pile_id)
        self.canvas.after(FLIP_STEP_MS, self.flipFired)

    def flipFired(self):
        flip = self.flip
        if flip is None:
            return
        flip.step += 1
        if flip.step > FLIP_STEPS:
            self.flip = None
        else:
            self.canvas.after(FLIP_STEP_MS, self.flipFired)
        self.redrawAll()

    def redrawAll(self):
        canvas = self.canvas
        canvas.delete(ALL)
        canvas.create_rectangle(0, 0, self.width, self.height, fill=THEME["bg_base"], width=0)
        snapshot = self.core.snapshot()
        layout = self.layout
        cw, ch = layout.card_width, layout.card_height
        dragged = set()
        if self.drag is not None:
            pile = snapshot.pile(self.drag.src_pile)
            dragged = {c.id for c in pile.cards[self.drag.src_idx:]}

        for pile in snapshot.piles:
            (x, y) = layout.origins[pile.id]
            if pile.size() == 0:
                caption = "A" if pile.id in FOUNDATIONS else ""
                self.renderer.draw_slot(canvas, x, y, cw, ch, caption)
                continue
            if pile.id in TABLEAUS:
                shown = enumerate(pile.cards)
            else:
                shown = [(pile.size() - 1, pile.top())]
                if len(pile.cards) > 1 and pile.id != STOCK and pile.top().id in dragged:
                    shown = [(pile.size() - 2, pile.cards[-2])] + shown
            for i, card in shown:
                if card.id in dragged:
                    continue
                r = layout.card_rect(pile.id, i if pile.id in TABLEAUS else 0)
                (cx, cy) = r.upperLeft
                show_back = self.flip is not None and self.flip.card_id == card.id \
                    and self.flip.step < FLIP_SHOW_FACE_STEP
                self.renderer.draw_card(canvas, cx, cy, card, cw, ch, card_style=self.card_style, show_back=show_back)

        if self.drag is not None:
            drag = self.drag
            pile = snapshot.pile(drag.src_pile)
            x = drag.x - drag.anchor_x
            y = drag.y - drag.anchor_y
            for i, card in enumerate(pile.cards[drag.src_idx:]):
                self.renderer.draw_card(canvas, x, y + i * TABLEAU_V_OFFSET, card, cw, ch, selected=True,
                                        card_style=self.card_style)

        canvas.create_text(10, self.height - 20, text="undo: z, redo: x, new game: n, quit: q",
                           fill=THEME["hud_text"], anchor=W)
        if self.hasWon:
            canvas.create_text(self.width / 2, self.height / 2, text="You win!", font="Serif 30 bold",
                               fill=THEME["hud_text"], anchor=CENTER)
        canvas.update()

    def mousePressed(self, event):
        if self.hasWon:
            return
        self.drag = None
        layout = self.layout
        if layout.hits_stock(event.x, event.y):
            self.core.drawStock()
            return
        snapshot = self.core.snapshot()
        hit = layout.card_at(snapshot, event.x, event.y)
        if hit is None:
            return
        (pile_id, idx) = hit
        if pile_id == STOCK or not snapshot.pile(pile_id).cards[idx].faceUp:
            return
        (x, y) = layout.card_rect(pile_id, idx if pile_id in TABLEAUS else 0).upperLeft
        self.drag = DragState(pile_id, idx, event.x - x, event.y - y, event.x, event.y)
        self.redrawAll()

    def mouseMoved(self, event):
        if self.drag is None:
            return
        self.drag.x = event.x
        self.drag.y = event.y
        self.redrawAll()

    def mouseReleased(self, event):
        drag = self.drag
        if drag is None:
            return
        self.drag = None
        target = self.layout.drop_target_at(self.core.snapshot(), event.x, event.y)
        if target is not None and target != drag.src_pile:
            result = self.core.attemptMove(drag.src_pile, drag.src_idx, target)
            if not result.accepted:
                logger.debug("drop refused: %s", result.reason.value)
        self.redrawAll()

    def keyPressed(self, event):
        if event.char == "z":
            if not self.core.undo():
                self.root.bell()
        elif event.char == "x":
            if not self.core.redo():
                self.root.bell()
        elif event.char == "n":
            if self.hasWon or messagebox.askokcancel("New Game", "Abandon this game and deal again?"):
                self.core.newGame()
        elif event.char == "q":
            self.root.destroy()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Play Klondike solitaire in a window.")
    parser.add_argument("--settings", default=None, help="path of the settings INI file")
    args = parser.parse_args(argv)
    settings = load_settings(args.settings)
    setup_logging(settings["log"]["level"])
    ui = settings["ui"]
    interface = TkInterface(int(ui["width"]), int(ui["height"]), ui["card_style"])
    core = Core(game_config(settings))
    core.registerInterface(interface)
    interface.run()


if __name__ == '__main__':
    main()
