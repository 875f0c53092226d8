"""PriceChart GUI layer.

Kept free of import side effects: importing ``gui`` or ``gui.charting`` never
creates a QApplication or loads PyQt6. Qt is only touched by ``gui.views``.
"""

from __future__ import annotations
