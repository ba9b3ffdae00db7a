from klondike.Core import Core, Move


class Interface:

    def __init__(self):
        self.core: Core = None

    def onStart(self):
        self.notifyRedraw()

    def onEvent(self, event: Move):
        """
        Invoked when a move, draw or recycle is performed or redone.
        :param event:
        :return:
        """
        self.notifyRedraw()

    def onUndoEvent(self, event: Move):
        """
        Invoked when a move is undone.
        :param event:
        :return:
        """
        self.notifyRedraw()

    def notifyRedraw(self):
        pass

    def onWin(self):
        pass
