"""Gameplay view — conveyor, bins, HUD and the pause overlay."""

from __future__ import annotations

import pygame

from assemblyline.input import KeyboardInput, PointerInput
from assemblyline.models import PowerUpKind, SessionStats
from assemblyline.renderer import colors
from assemblyline.renderer.hud import PAUSE_BUTTON
from assemblyline.renderer.scene import SceneRenderer
from assemblyline.session import GameSession
from assemblyline.views.base import ViewAction, ViewContext

_POWER_KEYS = {
    pygame.K_1: PowerUpKind.SLOW,
    pygame.K_2: PowerUpKind.AUTO_SORT,
    pygame.K_3: PowerUpKind.BONUS,
}


class GameView:
    name = "game"

    def __init__(self) -> None:
        self._context: ViewContext | None = None
        self._session: GameSession | None = None
        self._scene: SceneRenderer | None = None
        self._pointer: PointerInput | None = None
        self._keyboard: KeyboardInput | None = None
        self._finished: SessionStats | None = None
        self._font: pygame.font.Font | None = None

    @property
    def session(self) -> GameSession | None:
        return self._session

    def on_enter(self, context: ViewContext) -> None:
        self._context = context
        self._finished = None

        scene = SceneRenderer(context.screen_size)
        session = GameSession(
            difficulty=context.settings.difficulty,
            renderer=scene,
            audio=context.audio,
            sound_enabled=context.settings.sound_enabled,
            on_game_over=self._on_game_over,
        )
        self._scene = scene
        self._session = session
        self._pointer = PointerInput(
            item_at=lambda pos: scene.item_at(pos, session.now_ms),
            bin_at=scene.bin_at,
            screen_size=context.screen_size,
        )
        self._keyboard = KeyboardInput(session.registry.oldest)
        session.start()

    def on_exit(self) -> None:
        if self._session and self._session.running:
            self._session.quit()
        for source in (self._pointer, self._keyboard):
            if source is not None:
                source.close()

    def _on_game_over(self, stats: SessionStats) -> None:
        self._finished = stats

    def handle_event(self, event: pygame.event.Event) -> ViewAction | None:
        session = self._session
        if session is None:
            return None

        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                if session.paused:
                    return ViewAction(kind="switch", target="menu")
                session.pause()
                return None
            elif event.key in (pygame.K_p, pygame.K_SPACE):
                session.toggle_pause()
                return None
            elif event.key == pygame.K_r and session.paused:
                session.resume()
                return None
            elif event.key in _POWER_KEYS:
                session.activate_power_up(_POWER_KEYS[event.key])
                return None

        button = self._button_pressed(event)
        if button == PAUSE_BUTTON:
            session.toggle_pause()
            return None
        elif button is not None:
            session.activate_power_up(button)
            return None

        if session.paused:
            return None
        for source in (self._pointer, self._keyboard):
            if source is not None:
                source.feed_event(event)
        return None

    def _button_pressed(self, event: pygame.event.Event) -> PowerUpKind | str | None:
        """HUD button hit by a left click or a finger press, if any."""
        if self._scene is None:
            return None
        if event.type == pygame.MOUSEBUTTONDOWN:
            if event.button != 1 or getattr(event, "touch", False):
                return None
            return self._scene.button_at(event.pos)
        if event.type == pygame.FINGERDOWN:
            w, h = self._scene.screen_size
            return self._scene.button_at((int(event.x * w), int(event.y * h)))
        return None

    def update(self, dt: float) -> ViewAction | None:
        session = self._session
        if session is None:
            return None

        session.update(dt * 1000.0)
        if self._scene:
            self._scene.update(dt)

        for source in (self._pointer, self._keyboard):
            if source is None:
                continue
            while True:
                attempt = source.poll()
                if attempt is None:
                    break
                session.sort(attempt.item_id, attempt.target)

        # The held item may have been missed or auto-sorted under the pointer
        if self._pointer and self._pointer.dragging and self._pointer.dragging not in session.registry:
            self._pointer.cancel_drag()

        if self._finished is not None:
            return ViewAction(kind="switch", target="game_over", context_patch={"last_stats": self._finished})
        return None

    def draw(self, surface: pygame.Surface) -> None:
        session, scene, pointer = self._session, self._scene, self._pointer
        if session is None or scene is None or pointer is None:
            return

        scene.draw(
            surface,
            session.now_ms,
            session.power_ups.states(),
            dragging=pointer.dragging,
            drag_pos=pointer.drag_pos,
            hover_bin=pointer.hover_bin,
            paused=session.paused,
        )

        if session.paused:
            if self._font is None:
                self._font = pygame.font.SysFont("monospace", 28)
            overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
            overlay.fill((0, 0, 0, 170))
            surface.blit(overlay, (0, 0))
            w, h = surface.get_size()
            for i, line in enumerate(("PAUSED", "P / R / Resume: resume   Esc: main menu")):
                rendered = self._font.render(line, True, colors.HUD_TEXT)
                surface.blit(rendered, (w // 2 - rendered.get_width() // 2, h // 2 - 40 + i * 50))
