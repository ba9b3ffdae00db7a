from frontend.card_face import CardFaceRenderer
from frontend.view_model import AnimationEvent
from klondike.Core import FOUNDATIONS, STOCK, TABLEAUS, WASTE, CardMove, DrawCard, GameEvent, RecycleWaste
from klondike.Snapshot import GameSnapshot

PILE_SHORT_NAMES = {STOCK: "s", WASTE: "w"}
PILE_SHORT_NAMES.update({pileId: f"f{i}" for i, pileId in enumerate(FOUNDATIONS)})
PILE_SHORT_NAMES.update({pileId: f"t{i}" for i, pileId in enumerate(TABLEAUS)})
PILE_IDS_BY_SHORT_NAME = {short: pileId for pileId, short in PILE_SHORT_NAMES.items()}


class CoreAdapter:
    """Bridges engine snapshots and events to renderer-friendly data."""

    renderer = CardFaceRenderer()

    @staticmethod
    def event_to_animation(event: GameEvent, undone=False) -> AnimationEvent:
        if isinstance(event, DrawCard):
            return AnimationEvent(type="UNDRAW" if undone else "DRAW", payload={})
        if isinstance(event, RecycleWaste):
            return AnimationEvent(
                type="UNRECYCLE" if undone else "RECYCLE",
                payload={"count": event.count},
            )
        if isinstance(event, CardMove):
            payload = {"src": event.source.id, "dest": event.destination.id, "count": event.count}
            if event.uncovered is not None:
                payload["uncovered"] = event.uncovered.id
            return AnimationEvent(type="UNDO_MOVE" if undone else "MOVE", payload=payload)
        return AnimationEvent(type="UNKNOWN", payload={"event": type(event).__name__})

    @staticmethod
    def board_lines(snapshot: GameSnapshot) -> list:
        renderer = CoreAdapter.renderer
        stock = snapshot.pile(STOCK)
        waste = snapshot.pile(WASTE)
        waste_top = waste.top()
        top_row = [
            f"s:[{stock.size():2d}]",
            f"w:{renderer.label(waste_top) if waste_top else '   '}({waste.size()})",
        ]
        for pileId in FOUNDATIONS:
            top = snapshot.pile(pileId).top()
            top_row.append(f"{PILE_SHORT_NAMES[pileId]}:{renderer.label(top) if top else '   '}")
        lines = ["  ".join(top_row), ""]

        tableaus = [snapshot.pile(pileId) for pileId in TABLEAUS]
        lines.append("    " + "".join(f"{PILE_SHORT_NAMES[p.id]:<6}" for p in tableaus).rstrip())
        depth = max(p.size() for p in tableaus)
        for i in range(depth):
            row = ""
            for p in tableaus:
                cell = renderer.label(p.cards[i]) if i < p.size() else ""
                row += f"{cell:<6}"
            lines.append(f"{i:2d}: " + row.rstrip())
        return lines
