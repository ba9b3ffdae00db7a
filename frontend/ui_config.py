CARD_WIDTH = 80
CARD_HEIGHT = 110
H_GAP = 20
TOP_MARGIN = 40
LEFT_MARGIN = 40
TABLEAU_Y = TOP_MARGIN + CARD_HEIGHT + 40
TABLEAU_V_OFFSET = 25
CARD_RADIUS = 16

FLIP_STEP_MS = 60
FLIP_STEPS = 8
FLIP_SHOW_FACE_STEP = 6

DEFAULT_WIDTH = 1024
DEFAULT_HEIGHT = 720
MIN_WIDTH = 800
MIN_HEIGHT = 600

CARD_STYLE_ORDER = ("Classic", "Minimal")
LOG_LEVEL_ORDER = ("DEBUG", "INFO", "WARNING", "ERROR")

RANK_LABELS = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")
SUIT_SYMBOLS = {
    "clubs": "♣",
    "diamonds": "♦",
    "hearts": "♥",
    "spades": "♠",
}
RED_SUITS = ("hearts", "diamonds")

THEME = {
    "bg_base": "#1e0a3c",
    "slot_outline": "#c4b5fd",
    "card_front": "#fffbeb",
    "card_back": "#4c1d95",
    "card_border": "#1f2937",
    "card_select": "#fde047",
    "back_pattern": "#ddd6fe",
    "red": "#dc2626",
    "black": "#111827",
    "hud_text": "#f5f3ff",
}
