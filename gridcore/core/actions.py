"""
Input action definitions.

Actions abstract raw keys into semantic editor commands. Editor logic
checks Actions, never raw keys, so bindings can change in one place.

Usage:
    actions = bindings.resolve(event.key)
    if Action.NUDGE_UP in actions:
        ...
"""

from enum import Enum, auto

import pygame


class Action(Enum):
    """
    Semantic input actions.

    One key may map to several actions (the same letter can mean
    different things in edit and play mode); the mode decides which
    of them apply.
    """

    # Edit mode: selected object
    NUDGE_UP = auto()
    NUDGE_DOWN = auto()
    NUDGE_LEFT = auto()
    NUDGE_RIGHT = auto()
    GROW = auto()
    SHRINK = auto()

    # Play mode: avatar
    AVATAR_UP = auto()
    AVATAR_DOWN = auto()
    AVATAR_LEFT = auto()
    AVATAR_RIGHT = auto()


DEFAULT_KEY_BINDINGS: dict[Action, list[int]] = {
    Action.NUDGE_UP: [pygame.K_UP],
    Action.NUDGE_DOWN: [pygame.K_DOWN],
    Action.NUDGE_LEFT: [pygame.K_LEFT],
    Action.NUDGE_RIGHT: [pygame.K_RIGHT],
    Action.GROW: [pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS],
    Action.SHRINK: [pygame.K_MINUS, pygame.K_UNDERSCORE, pygame.K_KP_MINUS],

    Action.AVATAR_UP: [pygame.K_w],
    Action.AVATAR_DOWN: [pygame.K_s],
    Action.AVATAR_LEFT: [pygame.K_a],
    Action.AVATAR_RIGHT: [pygame.K_d],
}
