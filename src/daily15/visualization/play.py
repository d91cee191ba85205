from __future__ import annotations

import argparse
import logging
from datetime import date
from typing import Dict, Optional, Union

import pygame

from daily15.effects import Celebration
from daily15.genius import GeniusGridGame
from daily15.sliding import DEFAULT_TIERS, Phase, SlidingPuzzleGame

from .confetti import Confetti
from .renderer import Renderer
from .ticks import PygameTickSource

logger = logging.getLogger(__name__)

TABS = (("daily15", "Daily 15"), ("quickplay", "Blitz"), ("genius", "Genius"))
SUBTITLES = {
    "daily15": "Order from chaos.",
    "quickplay": "Sixty seconds on the clock.",
    "genius": "A perfect fit.",
}

Game = Union[SlidingPuzzleGame, GeniusGridGame]


class PygameEffects:
    """Celebration bursts, clipboard writes and reload hooks for the window"""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.confetti: Optional[Confetti] = None

    def celebrate(self, burst: Celebration) -> None:
        self.confetti = Confetti(burst, self.width, self.height)

    def copy_to_clipboard(self, text: str) -> None:
        try:
            if not pygame.scrap.get_init():
                pygame.scrap.init()
            pygame.scrap.put_text(text)
        except pygame.error as exc:
            logger.warning(f"Clipboard unavailable: {exc}")
            return
        logger.info("Copied to clipboard")

    def reload(self) -> None:
        self.confetti = None
        logger.info("Board reloaded")


class Host:
    """Switches between the three puzzles and routes input to engine commands.

    Leaving a tab tears its engine down, which stops any running countdown.
    """

    def __init__(self, renderer: Renderer, effects: PygameEffects, ticks: PygameTickSource,
                 today: Optional[date] = None) -> None:
        self.renderer = renderer
        self.effects = effects
        self.ticks = ticks
        self.today = today
        self.active = "daily15"
        self.show_rules = False
        self.game: Game = self._build(self.active)

    def _build(self, key: str) -> Game:
        if key == "genius":
            return GeniusGridGame(effects=self.effects)
        return SlidingPuzzleGame(key, effects=self.effects, ticks=self.ticks, today=self.today)

    def switch(self, key: str) -> None:
        if key == self.active:
            return
        self.close()
        self.active = key
        self.effects.confetti = None
        self.game = self._build(key)
        logger.info(f"Switched to {key}")

    def close(self) -> None:
        if isinstance(self.game, SlidingPuzzleGame):
            self.game.close()

    # ---------- Input ----------
    def on_key(self, key: int) -> None:
        name = pygame.key.name(key)
        if name in ("1", "2", "3"):
            self.switch(TABS[int(name) - 1][0])
            return
        if name == "h":
            self.show_rules = not self.show_rules
            return
        game = self.game
        if isinstance(game, GeniusGridGame):
            if game.handle_key(name):
                return
            if name == "u":
                game.undo()
            elif name == "n":
                game.reset()
        else:
            if name in ("return", "space") and game.is_timed and game.phase != Phase.PLAYING:
                game.start_round()
            elif name == "s":
                game.share()
            elif name == "n" and not game.is_timed:
                game.reset()

    def on_motion(self, pos) -> None:
        if isinstance(self.game, GeniusGridGame):
            cell = self.renderer.cell_at(pos, self.game.grid.size)
            if cell is None:
                self.game.clear_hover()
            else:
                self.game.hover(*cell)

    def on_click(self, pos) -> None:
        hits = self.renderer.hits
        for key, rect in hits.tabs.items():
            if rect.collidepoint(pos):
                self.switch(key)
                return
        for key, rect in hits.buttons.items():
            if rect.collidepoint(pos):
                self._press(key)
                return
        game = self.game
        if isinstance(game, GeniusGridGame):
            for piece_id, rect in hits.tray.items():
                if rect.collidepoint(pos):
                    game.select_or_deselect(piece_id)
                    return
            cell = self.renderer.cell_at(pos, game.grid.size)
            if cell is not None:
                game.click_cell(*cell)
        else:
            cell = self.renderer.cell_at(pos, game.board.size)
            if cell is not None:
                game.move_tile(*cell)

    def _press(self, button: str) -> None:
        game = self.game
        if button == "rotate" and isinstance(game, GeniusGridGame):
            game.rotate_selected()
        elif button == "undo" and isinstance(game, GeniusGridGame):
            game.undo()
        elif button == "reset":
            game.reset()
        elif button == "start" and isinstance(game, SlidingPuzzleGame):
            game.start_round()
        elif button == "share" and isinstance(game, SlidingPuzzleGame):
            game.share()

    def buttons(self) -> Dict[str, str]:
        game = self.game
        if isinstance(game, GeniusGridGame):
            return {"rotate": "Rotate", "undo": f"Undo ({len(game.history)})", "reset": "Reset"}
        if game.is_timed:
            if game.phase == Phase.PLAYING:
                return {}
            return {"start": "Start Round" if game.phase == Phase.WAITING else "Again"}
        if game.solved:
            return {"share": "Share", "reset": "Reset Puzzle"}
        return {}

    # ---------- Drawing ----------
    def draw(self, screen: pygame.Surface) -> None:
        self.renderer.draw_header(screen, TABS, self.active, SUBTITLES[self.active])
        if isinstance(self.game, GeniusGridGame):
            self.renderer.draw_genius(screen, self.game)
        else:
            self.renderer.draw_sliding(screen, self.game)
        self.renderer.draw_buttons(screen, self.buttons())
        if self.effects.confetti is not None:
            self.effects.confetti.draw(screen)
        if self.show_rules:
            tiers = self.game.rules.tiers if isinstance(self.game, SlidingPuzzleGame) else DEFAULT_TIERS.tiers
            self.renderer.draw_rules(screen, tiers)


def run(fps: int = 60, today: Optional[date] = None) -> None:
    pygame.init()
    ticks = PygameTickSource()
    try:
        renderer = Renderer()
        width, height = renderer.layout.width, renderer.layout.height
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Daily15.xyz")
        effects = PygameEffects(width, height)
        host = Host(renderer, effects, ticks, today=today)
        clock = pygame.time.Clock()

        running = True
        while running:
            for event in pygame.event.get():
                if ticks.dispatch(event):
                    continue
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        host.on_key(event.key)
                elif event.type == pygame.MOUSEMOTION:
                    host.on_motion(event.pos)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    host.on_click(event.pos)

            dt = clock.tick(fps) / 1000.0
            if effects.confetti is not None:
                effects.confetti.update(dt)
                if not effects.confetti.alive:
                    effects.confetti = None

            host.draw(screen)
            pygame.display.flip()
        host.close()
    finally:
        ticks.close()
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Daily15 puzzles")
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--date", type=date.fromisoformat, default=None,
                   help="Play the daily board of another day (YYYY-MM-DD)")
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    run(fps=args.fps, today=args.date)


if __name__ == "__main__":  # pragma: no cover
    main()
