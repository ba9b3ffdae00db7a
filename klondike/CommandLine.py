import argparse

from frontend.adapter import PILE_IDS_BY_SHORT_NAME, CoreAdapter
from frontend.logging_utils import get_logger, setup_logging
from frontend.settings_store import game_config, load_settings
from klondike.Core import TABLEAUS, TOP, Core, PileNotFound
from klondike.Interface import Interface

logger = get_logger(__name__)

HELP_TEXT = """commands:
  mv SRC[:IDX] DEST   move cards, piles are s w f0-f3 t0-t6
  d, draw             draw from stock (or recycle the waste)
  u, undo             undo the last move
  r, redo             redo the last undone move
  n, new [SEED]       deal a new game
  q, quit             leave"""


class CommandLineInterface(Interface):

    def __init__(self, out=None):
        super().__init__()
        self.out = out if out is not None else print

    def printAll(self):
        for line in CoreAdapter.board_lines(self.core.snapshot()):
            self.out(line)
        self.out("")

    def onStart(self):
        self.out(f"Game started! (seed {self.core.seed})")
        super().onStart()

    def notifyRedraw(self):
        self.printAll()

    def onWin(self):
        self.out("You win!")


def parsePile(token: str) -> str:
    pileId = PILE_IDS_BY_SHORT_NAME.get(token.strip().lower())
    if pileId is None:
        raise PileNotFound(token)
    return pileId


def parseSource(core: Core, token: str):
    """
    Parses "t3" or "t3:2". Without an index a tableau lifts its whole face-up run,
    other piles lift the top card.
    :return: (pile id, lift)
    """
    name, _, idx = token.partition(":")
    pileId = parsePile(name)
    if idx:
        return pileId, int(idx)
    if pileId in TABLEAUS:
        lift = core.liftableIndex(pileId)
        return pileId, TOP if lift is None else lift
    return pileId, TOP


def handleCommand(core: Core, command: str):
    """
    Runs one typed command.
    :return: a message for the player, or None
    """
    words = command.split()
    if len(words) == 0:
        return None
    verb = words[0].lower()
    if verb == "mv":
        if len(words) != 3:
            return "Usage: mv SRC[:IDX] DEST"
        try:
            (src, lift) = parseSource(core, words[1])
            dest = parsePile(words[2])
        except (ValueError, PileNotFound):
            return "Invalid pile!"
        result = core.attemptMove(src, lift, dest)
        if not result.accepted:
            return f"Cannot move! ({result.reason.value})"
        return None
    if verb in ("d", "draw"):
        if not core.drawStock():
            return "No card left!"
        return None
    if verb in ("u", "undo"):
        if not core.undo():
            return "Nothing to undo!"
        return None
    if verb in ("r", "redo"):
        if not core.redo():
            return "Nothing to redo!"
        return None
    if verb in ("n", "new"):
        try:
            seed = int(words[1]) if len(words) > 1 else None
        except ValueError:
            return "Invalid seed!"
        core.newGame(seed)
        return None
    if verb in ("h", "help"):
        return HELP_TEXT
    return "Invalid command!"


def parseArgs(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Klondike solitaire in the terminal.")
    parser.add_argument("--seed", type=int, default=None, help="deal a reproducible game")
    parser.add_argument("--settings", default=None, help="path of the settings INI file")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    return parser.parse_args(argv)


def main(argv=None):
    args = parseArgs(argv)
    settings = load_settings(args.settings)
    setup_logging(args.log_level or settings["log"]["level"])
    interface = CommandLineInterface()
    core = Core(game_config(settings))
    core.registerInterface(interface)
    core.newGame(args.seed)
    interface.out(HELP_TEXT)
    while True:
        try:
            command = input("> ")
        except EOFError:
            break
        if command.strip().lower() in ("q", "quit"):
            break
        message = handleCommand(core, command)
        if message is not None:
            interface.out(message)
    logger.info("command line session ended")


if __name__ == '__main__':
    main()
