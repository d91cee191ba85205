from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple

import pygame

from daily15.genius import GeniusGridGame
from daily15.sliding import SlidingPuzzleGame

Color = Tuple[int, int, int]

INK: Color = (44, 44, 44)
INK_LIGHT: Color = (110, 110, 110)
PAPER: Color = (240, 239, 233)
IVORY: Color = (250, 248, 240)
GOLD: Color = (191, 161, 95)
ALERT: Color = (185, 28, 28)
PREVIEW: Color = (214, 212, 204)


def hex_to_rgb(value: str) -> Color:
    value = value.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


@dataclass
class Layout:
    width: int = 520
    height: int = 780
    header: int = 120
    board_px: int = 384
    tray_top: int = 540
    tray_cell: int = 14
    button_top: int = 720


@dataclass
class HitAreas:
    tabs: Dict[str, pygame.Rect] = field(default_factory=dict)
    buttons: Dict[str, pygame.Rect] = field(default_factory=dict)
    tray: Dict[str, pygame.Rect] = field(default_factory=dict)


class Renderer:
    def __init__(self, layout: Optional[Layout] = None) -> None:
        self.layout = layout or Layout()
        self.font = pygame.font.SysFont(None, 24)
        self.small = pygame.font.SysFont(None, 20)
        self.tile_font = pygame.font.SysFont(None, 56)
        self.title_font = pygame.font.SysFont(None, 44)
        self.hits = HitAreas()

    # ---------- Geometry ----------
    def board_rect(self) -> pygame.Rect:
        left = (self.layout.width - self.layout.board_px) // 2
        return pygame.Rect(left, self.layout.header + 30, self.layout.board_px, self.layout.board_px)

    def cell_at(self, pos: Tuple[int, int], size: int) -> Optional[Tuple[int, int]]:
        rect = self.board_rect()
        if not rect.collidepoint(pos):
            return None
        cell = rect.width / size
        col = int((pos[0] - rect.left) // cell)
        row = int((pos[1] - rect.top) // cell)
        return min(row, size - 1), min(col, size - 1)

    # ---------- Drawing ----------
    def _text(self, screen: pygame.Surface, text: str, font: pygame.font.Font, color: Color, center: Tuple[int, int]) -> None:
        img = font.render(text, True, color)
        screen.blit(img, img.get_rect(center=center))

    def draw_header(self, screen: pygame.Surface, tabs: Sequence[Tuple[str, str]], active: str, subtitle: str) -> None:
        screen.fill(PAPER)
        self._text(screen, "Daily15.xyz", self.title_font, INK, (self.layout.width // 2, 30))
        self._text(screen, subtitle, self.small, INK_LIGHT, (self.layout.width // 2, 58))
        self.hits.tabs.clear()
        slot = self.layout.width // len(tabs)
        for i, (key, label) in enumerate(tabs):
            center = (slot * i + slot // 2, 92)
            color = INK if key == active else INK_LIGHT
            img = self.font.render(f"{i + 1} {label}", True, color)
            rect = img.get_rect(center=center)
            screen.blit(img, rect)
            if key == active:
                pygame.draw.line(screen, INK, rect.bottomleft, rect.bottomright, 1)
            self.hits.tabs[key] = rect.inflate(12, 12)

    def draw_buttons(self, screen: pygame.Surface, labels: Dict[str, str]) -> None:
        self.hits.buttons.clear()
        if not labels:
            return
        slot = self.layout.width // len(labels)
        for i, (key, label) in enumerate(labels.items()):
            rect = pygame.Rect(0, 0, slot - 24, 36)
            rect.center = (slot * i + slot // 2, self.layout.button_top)
            pygame.draw.rect(screen, INK, rect, 1, border_radius=6)
            self._text(screen, label, self.font, INK, rect.center)
            self.hits.buttons[key] = rect

    def draw_sliding(self, screen: pygame.Surface, game: SlidingPuzzleGame) -> None:
        rect = self.board_rect()
        stats = f"Moves {game.move_count}"
        if game.is_timed:
            stats += f"    Time {game.time_left}s"
        else:
            stats += f"    No. {game.puzzle_number}"
        time_color = ALERT if game.is_timed and (game.time_left or 0) <= 10 else INK
        self._text(screen, stats, self.font, time_color, (self.layout.width // 2, self.layout.header + 10))

        pygame.draw.rect(screen, IVORY, rect.inflate(16, 16), border_radius=8)
        size = game.board.size
        cell = rect.width // size
        for index, label in enumerate(game.tiles):
            if label is None:
                continue
            row, col = divmod(index, size)
            tile = pygame.Rect(rect.left + col * cell + 4, rect.top + row * cell + 4, cell - 8, cell - 8)
            fill = GOLD if game.solved else PAPER
            pygame.draw.rect(screen, fill, tile, border_radius=6)
            pygame.draw.rect(screen, INK_LIGHT, tile, 1, border_radius=6)
            self._text(screen, str(label), self.tile_font, IVORY if game.solved else INK, tile.center)

        overlay = self._sliding_overlay(game)
        if overlay:
            veil = pygame.Surface(rect.inflate(16, 16).size, pygame.SRCALPHA)
            veil.fill((*PAPER, 230))
            screen.blit(veil, rect.inflate(16, 16).topleft)
            for i, line in enumerate(overlay):
                font = self.title_font if i == 0 else self.font
                self._text(screen, line, font, INK, (rect.centerx, rect.centery - 30 + i * 36))

    def _sliding_overlay(self, game: SlidingPuzzleGame) -> Sequence[str]:
        phase = game.phase.name
        if game.solved:
            if game.is_timed:
                return ("Excellent", f"Finished with {game.time_left}s remaining")
            return (game.rank, f"Solved in {game.move_count} moves")
        if phase == "WAITING":
            return ("Blitz Mode", "Complete the 3x3 grid within 60 seconds.")
        if phase == "TIMED_OUT":
            return ("Time's up", "Press Enter to try again")
        return ()

    def draw_genius(self, screen: pygame.Surface, game: GeniusGridGame) -> None:
        rect = self.board_rect()
        self._text(screen, f"Remaining: {game.remaining}", self.font, INK, (self.layout.width // 2, self.layout.header + 10))
        pygame.draw.rect(screen, IVORY, rect.inflate(16, 16), border_radius=8)
        size = game.grid.size
        cell = rect.width // size
        preview = game.preview()
        preview_cells = set(preview.cells) if preview is not None and preview.valid else set()
        colors = {piece.id: hex_to_rgb(piece.color) for piece in game.pieces}
        for r, row in enumerate(game.cells):
            for c, value in enumerate(row):
                box = pygame.Rect(rect.left + c * cell + 1, rect.top + r * cell + 1, cell - 2, cell - 2)
                if value == "blocker":
                    pygame.draw.rect(screen, INK, box)
                    pygame.draw.circle(screen, INK_LIGHT, box.center, 4)
                elif value is not None:
                    pygame.draw.rect(screen, colors[value], box)
                elif (r, c) in preview_cells:
                    pygame.draw.rect(screen, PREVIEW, box)
                else:
                    pygame.draw.rect(screen, PAPER, box)
        self._draw_tray(screen, game)

    def _draw_tray(self, screen: pygame.Surface, game: GeniusGridGame) -> None:
        self.hits.tray.clear()
        cell = self.layout.tray_cell
        x, y = 30, self.layout.tray_top
        row_height = 0
        unplaced = [piece for piece in game.pieces if not game.is_placed(piece.id)]
        if not unplaced:
            self._text(screen, "Grid completed.", self.font, INK, (self.layout.width // 2, y + 40))
            return
        for piece in unplaced:
            shape = piece.shape()
            h, w = shape.shape
            if x + w * cell > self.layout.width - 30:
                x = 30
                y += row_height + 20
                row_height = 0
            color = hex_to_rgb(piece.color)
            for i in range(h):
                for j in range(w):
                    if shape[i, j]:
                        pygame.draw.rect(screen, color, (x + j * cell, y + i * cell, cell - 1, cell - 1))
            box = pygame.Rect(x, y, w * cell, h * cell)
            if piece.id == game.selected_id:
                pygame.draw.rect(screen, INK, box.inflate(10, 10), 1, border_radius=6)
            self.hits.tray[piece.id] = box.inflate(10, 10)
            x += w * cell + 28
            row_height = max(row_height, h * cell)

    def draw_rules(self, screen: pygame.Surface, tiers: Sequence[Tuple[str, float]]) -> None:
        veil = pygame.Surface((self.layout.width, self.layout.height), pygame.SRCALPHA)
        veil.fill((*PAPER, 245))
        screen.blit(veil, (0, 0))
        lines = [
            "Rules of Engagement",
            "",
            "Daily 15: order the tiles 1 to 15, empty slot last.",
            "A new puzzle every day at midnight.",
            "",
        ]
        previous = 0.0
        for label, threshold in tiers:
            bound = f"up to {threshold:g} moves" if threshold != float("inf") else f"over {previous:g} moves"
            lines.append(f"{label:<12} {bound}")
            previous = threshold
        lines += [
            "",
            "Blitz: solve the 3x3 grid within 60 seconds.",
            "Genius: fit every piece. Click a piece, then the grid.",
            "Space or R rotates, U undoes, N resets.",
            "",
            "Press H to close",
        ]
        for i, line in enumerate(lines):
            font = self.title_font if i == 0 else self.font
            self._text(screen, line, font, INK, (self.layout.width // 2, 80 + i * 30))
