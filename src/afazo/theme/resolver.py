# src/afazo/theme/resolver.py

from __future__ import annotations

"""
Theme resolution: unresolved -> light | dark.

- initialize(): stored preference wins; otherwise the system default is
  adopted WITHOUT being written back. Persistence starts with the first
  explicit choice.
- set_dark(): explicit choice, always persisted (even when unchanged).
- Every resolved change toggles the "dark" class on the style sink.
"""

import logging

from ..core.ports import PreferenceStore, StyleSink, SystemPreference
from ..core.state import AppState, ThemeMode
from ..errors import ViewNotReady

logger = logging.getLogger(__name__)

THEME_KEY = "theme"
DARK_CLASS = "dark"


class ThemeResolver:
    def __init__(
        self,
        state: AppState,
        prefs: PreferenceStore,
        system: SystemPreference,
        style: StyleSink,
    ) -> None:
        self._state = state
        self._prefs = prefs
        self._system = system
        self._style = style

    @property
    def mode(self) -> ThemeMode:
        return self._state.theme

    @property
    def resolved(self) -> bool:
        return self._state.theme != ThemeMode.UNRESOLVED

    def initialize(self) -> ThemeMode:
        if self.resolved:
            return self._state.theme

        stored = self._prefs.get(THEME_KEY)
        if stored in (ThemeMode.LIGHT.value, ThemeMode.DARK.value):
            mode = ThemeMode(stored)
            logger.info("Theme from stored preference: %s", mode.value)
        else:
            if stored is not None:
                logger.warning("Ignoring unknown stored theme %r", stored)
            mode = ThemeMode.DARK if self._system.prefers_dark() else ThemeMode.LIGHT
            logger.info("Theme from system default: %s (not persisted)", mode.value)

        self._apply(mode)
        return mode

    def set_dark(self, dark: bool) -> ThemeMode:
        mode = ThemeMode.DARK if dark else ThemeMode.LIGHT
        # Persist first: a failed write leaves the current theme in place.
        self._prefs.set(THEME_KEY, mode.value)
        self._apply(mode)
        return mode

    def toggle(self) -> ThemeMode:
        if not self.resolved:
            raise ViewNotReady("theme is not resolved yet")
        return self.set_dark(self._state.theme != ThemeMode.DARK)

    def _apply(self, mode: ThemeMode) -> None:
        self._state.theme = mode
        self._style.set_class(DARK_CLASS, mode == ThemeMode.DARK)
