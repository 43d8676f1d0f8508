"""Tests for the view stack, HUD buttons and menu settings."""

import pygame

from assemblyline.models import Difficulty, GameSettings, PowerUpKind
from assemblyline.renderer.hud import PAUSE_BUTTON, hud_buttons
from assemblyline.renderer.scene import SceneRenderer
from assemblyline.session import Renderer
from assemblyline.settings import JsonSettingsStore
from assemblyline.views.base import ViewContext, ViewManager
from assemblyline.views.game_view import GameView
from assemblyline.views.menu_view import MenuView

SCREEN = (1280, 720)


class FlushCounter:
    def __init__(self) -> None:
        self.flushes = 0

    def play(self, sound) -> None:
        pass

    def flush_pending(self) -> None:
        self.flushes += 1


class IdleView:
    name = "idle"

    def on_enter(self, context): pass
    def on_exit(self): pass
    def handle_event(self, event): return None
    def update(self, dt): return None
    def draw(self, surface): pass


def _game_view() -> GameView:
    view = GameView()
    view.on_enter(ViewContext(screen_size=SCREEN, audio=None))
    return view


def _click(pos):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=pos, button=1, touch=False)


def _tap(pos):
    return pygame.event.Event(
        pygame.FINGERDOWN, x=pos[0] / SCREEN[0], y=pos[1] / SCREEN[1], finger_id=0, touch_id=0,
    )


def test_audio_flushed_every_frame_outside_game_view():
    audio = FlushCounter()
    views = ViewManager(ViewContext(screen_size=SCREEN, audio=audio))
    views.register(IdleView)
    views.push("idle")

    for _ in range(3):
        assert views.update(0.016)
    assert audio.flushes == 3


def test_hud_buttons_do_not_overlap():
    rects = list(hud_buttons(SCREEN[0]).values())
    assert len(rects) == len(PowerUpKind) + 1
    for i, rect in enumerate(rects):
        assert rect.right <= SCREEN[0] and rect.left >= 0
        assert all(not rect.colliderect(other) for other in rects[i + 1:])


def test_click_power_up_button_activates_it():
    view = _game_view()
    rect = hud_buttons(SCREEN[0])[PowerUpKind.SLOW]

    view.handle_event(_click(rect.center))
    assert view.session.power_ups.is_active(PowerUpKind.SLOW)
    assert not view.session.power_ups.is_active(PowerUpKind.BONUS)


def test_tap_power_up_button_activates_it():
    view = _game_view()
    rect = hud_buttons(SCREEN[0])[PowerUpKind.BONUS]

    view.handle_event(_tap(rect.center))
    assert view.session.power_ups.is_active(PowerUpKind.BONUS)


def test_tap_pause_button_toggles_pause():
    view = _game_view()
    rect = hud_buttons(SCREEN[0])[PAUSE_BUTTON]

    view.handle_event(_tap(rect.center))
    assert view.session.paused
    view.handle_event(_click(rect.center))
    assert not view.session.paused


def test_power_up_button_ignored_while_paused():
    view = _game_view()
    view.session.pause()

    view.handle_event(_click(hud_buttons(SCREEN[0])[PowerUpKind.AUTO_SORT].center))
    assert not view.session.power_ups.is_active(PowerUpKind.AUTO_SORT)


def test_scene_renderer_is_a_renderer():
    scene = SceneRenderer(SCREEN)
    assert isinstance(scene, Renderer)
    scene.show_game_over(120)
    assert scene.button_at(hud_buttons(SCREEN[0])[PowerUpKind.SLOW].center) == PowerUpKind.SLOW
    assert scene.button_at((5, 700)) is None


def test_menu_change_does_not_persist_run_overrides(tmp_path):
    store = JsonSettingsStore(tmp_path / "settings.json")
    store.save(GameSettings(difficulty=Difficulty.EASY, sound_enabled=True))

    menu = MenuView()
    # As if started with --difficulty hard --mute
    menu.on_enter(ViewContext(
        screen_size=SCREEN,
        audio=None,
        settings_store=store,
        settings=GameSettings(difficulty=Difficulty.HARD, sound_enabled=False),
    ))
    menu.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_LEFT, mod=0, unicode="", scancode=0))

    assert store.load() == GameSettings(difficulty=Difficulty.MEDIUM, sound_enabled=True)


def test_menu_sound_toggle_persists_only_sound(tmp_path):
    store = JsonSettingsStore(tmp_path / "settings.json")

    menu = MenuView()
    menu.on_enter(ViewContext(
        screen_size=SCREEN,
        audio=None,
        settings_store=store,
        settings=GameSettings(difficulty=Difficulty.HARD, sound_enabled=True),
    ))
    menu.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_s, mod=0, unicode="s", scancode=0))

    assert store.load() == GameSettings(difficulty=Difficulty.MEDIUM, sound_enabled=False)
