"""Pager keybindings manager."""

from __future__ import annotations

from typing import Literal

from pi.pager.keys import Key, KeyId

PagerAction = Literal[
    "quit",
    "scrollUp",
    "scrollDown",
    "pageUp",
    "pageDown",
]

PagerKeybindingsConfig = dict[PagerAction, KeyId | list[KeyId]]

DEFAULT_PAGER_KEYBINDINGS: dict[PagerAction, KeyId | list[KeyId]] = {
    "quit": "q",
    "scrollUp": [Key.up, "k"],
    "scrollDown": [Key.down, "j"],
    "pageUp": Key.page_up,
    "pageDown": Key.page_down,
}


class PagerKeybindingsManager:
    """Maps key identifiers to pager actions."""

    def __init__(self, config: PagerKeybindingsConfig | None = None) -> None:
        self._action_to_keys: dict[PagerAction, list[KeyId]] = {}
        self._key_to_action: dict[KeyId, PagerAction] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: PagerKeybindingsConfig) -> None:
        self._action_to_keys.clear()
        self._key_to_action.clear()

        # Start with defaults
        for action, keys in DEFAULT_PAGER_KEYBINDINGS.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        # Override with user config
        for action, keys in config.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        for action, key_array in self._action_to_keys.items():
            for key in key_array:
                self._key_to_action[key] = action

    def action_for(self, key: KeyId | None) -> PagerAction | None:
        """Return the action bound to *key*, or ``None``."""
        if key is None:
            return None
        return self._key_to_action.get(key)

    def get_keys(self, action: PagerAction) -> list[KeyId]:
        """Get keys bound to an action."""
        return self._action_to_keys.get(action, [])

    def set_config(self, config: PagerKeybindingsConfig) -> None:
        """Update configuration."""
        self._build_maps(config)


_global_pager_keybindings: PagerKeybindingsManager | None = None


def get_pager_keybindings() -> PagerKeybindingsManager:
    global _global_pager_keybindings
    if _global_pager_keybindings is None:
        _global_pager_keybindings = PagerKeybindingsManager()
    return _global_pager_keybindings


def set_pager_keybindings(manager: PagerKeybindingsManager) -> None:
    global _global_pager_keybindings
    _global_pager_keybindings = manager
