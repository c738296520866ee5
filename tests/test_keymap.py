"""Tests for keymap dispatch and the input mode machine."""

from typing import Optional

import pytest

from updir.core.actions import CONTINUE, INTERRUPT, QUIT, SUSPEND, Confirm
from updir.core.events import Key, KeyEvent, MouseEvent, MouseKind
from updir.core.keymap import (
    Binding,
    BindingContext,
    Chord,
    Keymap,
    KeymapDispatcher,
    create_default_bindings,
    parse_keymap,
)
from updir.core.modes import AwaitingFollowupKey, Idle, InputModeMachine, PendingJump
from updir.core.selection import JumpDirection, LastJump, SelectionModel


def char(c: str, ctrl: bool = False, alt: bool = False) -> KeyEvent:
    return KeyEvent(char=c, ctrl=ctrl, alt=alt, raw=c)


def named(key: Key) -> KeyEvent:
    return KeyEvent(key=key)


def press(dispatcher: KeymapDispatcher, model: SelectionModel, modes: InputModeMachine, *events: KeyEvent):
    """Feed events the way the controller does; return the last action."""
    action = CONTINUE
    for event in events:
        if modes.consume(event, model):
            action = CONTINUE
            continue
        action = dispatcher.handle_key(event, model, modes)
    return action


@pytest.fixture
def modes() -> InputModeMachine:
    return InputModeMachine()


@pytest.fixture
def vim() -> KeymapDispatcher:
    return KeymapDispatcher(Keymap.VIM)


@pytest.fixture
def emacs() -> KeymapDispatcher:
    return KeymapDispatcher(Keymap.EMACS)


class TestParseKeymap:
    """Keymap configuration values."""

    @pytest.mark.parametrize("value,expected", [
        ("vim", Keymap.VIM),
        ("emacs", Keymap.EMACS),
        ("Emacs", None),
        ("nano", None),
        ("", None),
        (None, None),
    ])
    def test_values(self, value: Optional[str], expected: Optional[Keymap]) -> None:
        assert parse_keymap(value) is expected


class TestVimKeys:
    """Vim keymap."""

    @pytest.mark.parametrize("c", ["h", "k", "b"])
    def test_left(self, vim, model, modes, c: str) -> None:
        press(vim, model, modes, char(c))
        assert model.current_index == 2

    @pytest.mark.parametrize("c", ["l", "j", "w"])
    def test_right(self, vim, model, modes, c: str) -> None:
        model.move_to_start()
        press(vim, model, modes, char(c))
        assert model.current_index == 1

    @pytest.mark.parametrize("c", ["^", "H", "0"])
    def test_start(self, vim, model, modes, c: str) -> None:
        press(vim, model, modes, char(c))
        assert model.current_index == 0

    @pytest.mark.parametrize("c", ["$", "L"])
    def test_end(self, vim, model, modes, c: str) -> None:
        model.move_to_start()
        press(vim, model, modes, char(c))
        assert model.current_index == 3

    def test_middle(self, vim, model, modes) -> None:
        press(vim, model, modes, char("M"))
        assert model.current_index == 2

    def test_digits_accumulate(self, vim, deep_model, modes) -> None:
        press(vim, deep_model, modes, char("1"), char("0"))
        assert deep_model.pending_count == "10"
        assert deep_model.current_index == 19
        press(vim, deep_model, modes, char("h"))
        assert deep_model.current_index == 9
        assert deep_model.pending_count == ""

    def test_count_with_arrow(self, vim, deep_model, modes) -> None:
        press(vim, deep_model, modes, char("4"), named(Key.LEFT))
        assert deep_model.current_index == 15

    def test_jump_forward(self, vim, model, modes) -> None:
        model.move_to_start()
        press(vim, model, modes, char("f"))
        assert modes.awaiting
        press(vim, model, modes, char("r"))
        assert not modes.awaiting
        assert model.current_index == 2
        assert model.last_jump == LastJump("r", JumpDirection.FORWARD)

    def test_jump_backward(self, vim, model, modes) -> None:
        press(vim, model, modes, char("F"), char("h"))
        assert model.current_index == 1
        assert model.last_jump == LastJump("h", JumpDirection.BACKWARD)

    def test_count_captured_when_armed(self, vim, modes) -> None:
        model = SelectionModel(["/", "x1/", "x2/", "x3/", "x4"])
        model.move_to_start()
        press(vim, model, modes, char("3"), char("f"))
        assert model.pending_count == ""
        assert modes.mode == AwaitingFollowupKey(PendingJump(JumpDirection.FORWARD, "3"))
        press(vim, model, modes, char("x"))
        assert model.current_index == 3

    def test_follow_up_key_is_not_dispatched(self, vim, model, modes) -> None:
        # "q" is the jump target, not quit
        action = press(vim, model, modes, char("f"), char("q"))
        assert action == CONTINUE
        assert model.last_jump == LastJump("q", JumpDirection.FORWARD)

    def test_escape_cancels_jump(self, vim, model, modes) -> None:
        model.move_to_start()
        action = press(vim, model, modes, char("f"), named(Key.ESCAPE))
        assert action == CONTINUE
        assert model.current_index == 0
        assert model.last_jump is None
        assert modes.mode == Idle()

    def test_escape_cancel_discards_count(self, vim, deep_model, modes) -> None:
        press(vim, deep_model, modes, char("5"), char("f"), named(Key.ESCAPE), char("h"))
        assert deep_model.current_index == 18

    def test_repeat_keys(self, vim, modes) -> None:
        model = SelectionModel(["/", "x1/", "y/", "x2/", "x3"])
        model.move_to_start()
        press(vim, model, modes, char("f"), char("x"), char(";"))
        assert model.current_index == 3
        press(vim, model, modes, char(","))
        assert model.current_index == 1

    def test_emacs_chords_ignored(self, vim, model, modes) -> None:
        press(vim, model, modes, char("a", ctrl=True), char("e", ctrl=True))
        assert model.current_index == 3


class TestEmacsKeys:
    """Emacs keymap."""

    @pytest.mark.parametrize("event", [char("b", ctrl=True), char("b", alt=True)])
    def test_left(self, emacs, model, modes, event: KeyEvent) -> None:
        press(emacs, model, modes, event)
        assert model.current_index == 2

    @pytest.mark.parametrize("event", [char("f", ctrl=True), char("f", alt=True)])
    def test_right(self, emacs, model, modes, event: KeyEvent) -> None:
        model.move_to_start()
        press(emacs, model, modes, event)
        assert model.current_index == 1

    def test_start_and_end(self, emacs, model, modes) -> None:
        press(emacs, model, modes, char("a", ctrl=True))
        assert model.current_index == 0
        press(emacs, model, modes, char("e", ctrl=True))
        assert model.current_index == 3

    def test_jump_forward(self, emacs, model, modes) -> None:
        model.move_to_start()
        press(emacs, model, modes, char("]", ctrl=True))
        assert modes.mode == AwaitingFollowupKey(PendingJump(JumpDirection.FORWARD, ""))
        press(emacs, model, modes, char("u"))
        assert model.current_index == 2

    @pytest.mark.parametrize("c", ["h", "l", "f", "b", "0", "3", "M", "$"])
    def test_plain_letters_do_nothing(self, emacs, model, modes, c: str) -> None:
        action = press(emacs, model, modes, char(c))
        assert action == CONTINUE
        assert model.current_index == 3
        assert model.pending_count == ""
        assert not modes.awaiting


class TestSharedKeys:
    """Bindings active under both keymaps."""

    @pytest.fixture(params=[Keymap.VIM, Keymap.EMACS])
    def dispatcher(self, request) -> KeymapDispatcher:
        return KeymapDispatcher(request.param)

    def test_arrows_home_end(self, dispatcher, model, modes) -> None:
        press(dispatcher, model, modes, named(Key.LEFT))
        assert model.current_index == 2
        press(dispatcher, model, modes, named(Key.HOME))
        assert model.current_index == 0
        press(dispatcher, model, modes, named(Key.RIGHT))
        assert model.current_index == 1
        press(dispatcher, model, modes, named(Key.END))
        assert model.current_index == 3

    def test_enter_confirms(self, dispatcher, model, modes) -> None:
        press(dispatcher, model, modes, named(Key.LEFT))
        action = press(dispatcher, model, modes, named(Key.ENTER))
        assert action == Confirm("/home/user/")

    @pytest.mark.parametrize("event", [char("q"), named(Key.ESCAPE)])
    def test_quit(self, dispatcher, model, modes, event: KeyEvent) -> None:
        assert press(dispatcher, model, modes, event) == QUIT

    def test_interrupt_and_suspend(self, dispatcher, model, modes) -> None:
        assert press(dispatcher, model, modes, char("c", ctrl=True)) == INTERRUPT
        assert press(dispatcher, model, modes, char("z", ctrl=True)) == SUSPEND

    def test_plain_c_and_z_continue(self, dispatcher, model, modes) -> None:
        assert press(dispatcher, model, modes, char("c")) == CONTINUE
        assert press(dispatcher, model, modes, char("z")) == CONTINUE


class TestInputModeMachine:
    """Idle / awaiting transitions."""

    def test_starts_idle(self, modes) -> None:
        assert modes.mode == Idle()
        assert not modes.awaiting

    def test_consume_when_idle(self, modes, model) -> None:
        assert modes.consume(char("x"), model) is False
        assert model.current_index == 3

    def test_any_event_returns_to_idle(self, modes, model) -> None:
        modes.arm_jump(JumpDirection.BACKWARD, model)
        mouse = MouseEvent(kind=MouseKind.MOVED, column=0, row=0)
        assert modes.consume(mouse, model) is True
        assert modes.mode == Idle()
        assert model.current_index == 3
        assert model.last_jump is None

    def test_take_resets(self, modes, model) -> None:
        model.push_digit("2")
        modes.arm_jump(JumpDirection.FORWARD, model)
        taken = modes.take()
        assert taken == AwaitingFollowupKey(PendingJump(JumpDirection.FORWARD, "2"))
        assert modes.take() == Idle()


class TestBindingRegistry:
    """Binding tables as data."""

    def test_chord_requires_modifier(self) -> None:
        chord = Chord("b", ctrl=True)
        assert chord.matches(char("b", ctrl=True))
        assert chord.matches(char("b", ctrl=True, alt=True))
        assert not chord.matches(char("b"))

    def test_plain_char_ignores_modifiers(self) -> None:
        binding = Binding("t", ["q"], "test", "quit")
        assert binding.matches(char("q"))
        assert binding.matches(char("q", ctrl=True))
        assert not binding.matches(named(Key.ENTER))

    def test_key_display(self) -> None:
        registry = create_default_bindings()
        assert registry.get("emacs_left").key_display == "C-b M-b"
        assert registry.get("quit").key_display == "q Esc"

    def test_categories_in_help_order(self) -> None:
        registry = create_default_bindings()
        vim_categories = list(registry.get_by_category(BindingContext.VIM))
        assert vim_categories == ["Motion", "Count", "Search", "Session"]
        emacs_categories = list(registry.get_by_category(BindingContext.EMACS))
        assert emacs_categories == ["Motion", "Search", "Session"]

    def test_shared_bindings_included(self) -> None:
        registry = create_default_bindings()
        ids = {b.id for b in registry.get_for_context(BindingContext.EMACS)}
        assert {"confirm", "quit", "emacs_left"} <= ids
        assert "vim_left" not in ids

    def test_every_handler_exists(self) -> None:
        registry = create_default_bindings()
        dispatcher = KeymapDispatcher(Keymap.VIM, registry)
        for context in BindingContext:
            for binding in registry.get_for_context(context, include_shared=False):
                assert callable(getattr(dispatcher, binding.handler))
