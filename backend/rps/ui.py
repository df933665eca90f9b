"""Screen layout for one connected player.

A frame is a plain dict describing labels and buttons inside a fixed
320x320 canvas; clients draw it however they like. Pointer events are
hit-tested against the move buttons here, so a completed click turns into a
``Session.pick`` call.
"""
from typing import List, Optional, Tuple

from rps.models import Move, Phase, PlayerView

UI_WIDTH = 320
UI_HEIGHT = 320
RANKINGS_SPLIT_X = 240

PRIMARY_COLOR = '#6002ee'
PRIMARY_LIGHT_COLOR = '#9946ff'
PRESSED_COLOR = '#000000'
PICKING_BACKGROUND = '#ffff00'
BACKGROUND = '#ffffff'

Rect = Tuple[int, int, int, int]

MOVE_BUTTONS: List[Tuple[Move, Rect]] = [
    (Move.ROCK, (8, 32, 77, 64)),
    (Move.PAPER, (85, 32, 154, 64)),
    (Move.SCISSORS, (162, 32, 231, 64)),
]


def contains(rect: Rect, x: int, y: int) -> bool:
    x0, y0, x1, y1 = rect
    return x0 <= x < x1 and y0 <= y < y1


class Pointer:
    def __init__(self, x: int = -1, y: int = -1, button_mask: int = 0):
        self.x = int(x)
        self.y = int(y)
        self.button_mask = int(button_mask)

    @property
    def pressed(self) -> bool:
        return bool(self.button_mask & 1)


class ButtonState:
    """Tracks a press that started over the button until it is released."""

    def __init__(self):
        self.clicking = False

    def update(self, rect: Rect, pointer: Pointer) -> Tuple[bool, str]:
        """Feed the latest pointer. Returns (clicked, color)."""
        hovering = contains(rect, pointer.x, pointer.y)
        clicked = False
        if self.clicking:
            if not pointer.pressed:
                clicked = hovering
                self.clicking = False
        elif hovering and pointer.pressed:
            self.clicking = True

        color = PRIMARY_COLOR
        if hovering:
            color = PRESSED_COLOR if pointer.pressed else PRIMARY_LIGHT_COLOR
        return clicked, color


def label(text: str, rect: Rect) -> dict:
    return {'kind': 'label', 'text': text, 'rect': list(rect)}


def button(text: str, rect: Rect, color: str) -> dict:
    return {'kind': 'button', 'text': text, 'rect': list(rect), 'color': color}


def format_time_left(seconds: float) -> str:
    return f"{seconds:.1f}s left..."


class Screen:
    """Per-connection presentation state.

    Owns the player's handle and button press state; reads everything else
    from the session on each update.
    """

    def __init__(self, session, player_id: int):
        self.session = session
        self.player_id = player_id
        self.pointer = Pointer()
        self.buttons = {move: ButtonState() for move, _ in MOVE_BUTTONS}

    def update(self, pointer: Optional[Pointer] = None) -> dict:
        """Apply a pointer event (if any) and return the current frame.

        Raises UnknownPlayer once the player is gone from the session.
        """
        if pointer is not None:
            self.pointer = pointer
        state = self.session.get_state(self.player_id)
        return self.render(state)

    def render(self, state: PlayerView) -> dict:
        elements = self._rankings(state)
        background = BACKGROUND

        if state.phase is Phase.WAITING:
            elements.append(label('Waiting for other players...', (8, 8, UI_WIDTH - 8, 24)))

        elif state.phase is Phase.PICKING:
            background = PICKING_BACKGROUND
            if state.opponent is None:
                elements.append(label('YOU MUST SIT OUT THIS ROUND', (8, 8, UI_WIDTH - 8, 24)))
                elements.append(label('(must be an odd number of players)', (8, 32, UI_WIDTH - 8, 40)))
            else:
                elements.append(label('CHOOSE YOUR WEAPON', (8, 8, UI_WIDTH - 8, 24)))
                for move, rect in MOVE_BUTTONS:
                    clicked, color = self.buttons[move].update(rect, self.pointer)
                    if clicked:
                        self.session.pick(self.player_id, move)
                    elements.append(button(move.value, rect, color))
                elements.append(label(f"WHAT WILL {state.opponent.name} CHOOSE?", (8, 200, UI_WIDTH - 8, 216)))
            elements.append(label(format_time_left(state.time_left), (8, 72, UI_WIDTH - 8, 88)))

        elif state.phase is Phase.REVIEW:
            if state.opponent is None:
                elements.append(label('Wait for it...', (8, 8, RANKINGS_SPLIT_X - 8, 24)))
            else:
                mine = f"YOUR MOVE: {state.player_move or 'none'}"
                theirs = f"{state.opponent.name}'s MOVE: {state.opponent_move or 'none'}"
                winner = '-- there was no winner --'
                if state.winner == self.player_id:
                    winner = 'YOU WIN!!'
                elif state.winner is not None and state.winner == state.opponent.player_id:
                    winner = 'THEY WON!!'
                elements.append(label(mine, (8, 8, RANKINGS_SPLIT_X - 8, 24)))
                elements.append(label(theirs, (8, 32, RANKINGS_SPLIT_X - 8, 48)))
                elements.append(label(winner, (8, 56, RANKINGS_SPLIT_X - 8, 72)))

        return {
            'width': UI_WIDTH,
            'height': UI_HEIGHT,
            'background': background,
            'phase': state.phase.value,
            'elements': elements,
        }

    def _rankings(self, state: PlayerView) -> list:
        out = []
        y = 8
        split_x = (UI_HEIGHT + RANKINGS_SPLIT_X) // 2
        for player in state.rankings:
            name = player.name
            if player.player_id == self.player_id:
                name += '*'
            out.append(label(name, (RANKINGS_SPLIT_X + 8, y, split_x - 8, y + 8)))
            out.append(label(str(player.wins), (split_x, y, UI_WIDTH - 8, y + 8)))
            y += 16
        return out
