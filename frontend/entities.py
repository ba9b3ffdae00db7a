from dataclasses import dataclass


class Rect:

    def __init__(self, upperLeft, width, height):
        self.upperLeft = upperLeft
        self.width = width
        self.height = height

    def contains(self, x, y):
        (tx, ty) = self.upperLeft
        return tx <= x <= tx + self.width and ty <= y <= ty + self.height

    def __repr__(self):
        return f"Rect({self.upperLeft}, {self.width}, {self.height})"


@dataclass
class DragState:
    src_pile: str
    src_idx: int
    anchor_x: float
    anchor_y: float
    x: float
    y: float


@dataclass
class FlipState:
    card_id: int
    pile_id: str
    step: int = 0
