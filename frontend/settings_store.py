import configparser
from pathlib import Path

from frontend.ui_config import CARD_STYLE_ORDER, DEFAULT_HEIGHT, DEFAULT_WIDTH, LOG_LEVEL_ORDER, MIN_HEIGHT, MIN_WIDTH
from klondike.Core import GameConfig

SETTINGS_PATH = Path(__file__).with_name("settings.ini")

DEFAULT_SETTINGS = {
    "game": {"seed": ""},
    "ui": {"width": str(DEFAULT_WIDTH), "height": str(DEFAULT_HEIGHT), "card_style": "Classic"},
    "log": {"level": "WARNING"},
}


def _defaults():
    return {section: dict(values) for section, values in DEFAULT_SETTINGS.items()}


def _clamp_int(raw, default, minimum):
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    if value < minimum:
        return minimum
    return value


def _sanitize(settings):
    data = _defaults()
    for section, values in settings.items():
        if section in data:
            data[section].update(values)

    seed = str(data["game"].get("seed", "")).strip()
    try:
        data["game"]["seed"] = str(int(seed)) if seed else ""
    except ValueError:
        data["game"]["seed"] = ""

    ui = data["ui"]
    ui["width"] = str(_clamp_int(ui.get("width"), DEFAULT_WIDTH, MIN_WIDTH))
    ui["height"] = str(_clamp_int(ui.get("height"), DEFAULT_HEIGHT, MIN_HEIGHT))
    if ui.get("card_style") not in CARD_STYLE_ORDER:
        ui["card_style"] = DEFAULT_SETTINGS["ui"]["card_style"]

    level = str(data["log"].get("level", "")).strip().upper()
    if level not in LOG_LEVEL_ORDER:
        level = DEFAULT_SETTINGS["log"]["level"]
    data["log"]["level"] = level
    return data


def load_settings(path: Path = None):
    path = Path(path) if path is not None else SETTINGS_PATH
    parser = configparser.ConfigParser()
    if not path.exists():
        return _defaults()
    try:
        parser.read(path, encoding="utf-8")
    except configparser.Error:
        return _defaults()
    raw = {section: dict(parser[section]) for section in DEFAULT_SETTINGS if section in parser}
    return _sanitize(raw)


def save_settings(settings, path: Path = None):
    path = Path(path) if path is not None else SETTINGS_PATH
    data = _sanitize(settings)
    parser = configparser.ConfigParser()
    for section, values in data.items():
        parser[section] = values
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        parser.write(f)


def game_config(settings) -> GameConfig:
    seed = settings["game"]["seed"]
    return GameConfig(seed=int(seed) if seed else None)
