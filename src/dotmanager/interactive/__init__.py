"""Interactive diff selection over the printed status table."""

from dotmanager.interactive.navigator import Navigator, NavigatorState, RowPainter
from dotmanager.interactive.terminal import RawTerminal

__all__ = ["Navigator", "NavigatorState", "RawTerminal", "RowPainter"]
