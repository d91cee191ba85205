from __future__ import annotations

from typing import Optional

import numpy as np
import pygame

from daily15.effects import Celebration

from .renderer import hex_to_rgb

GRAVITY = 900.0  # px/s^2
DRAG = 1.2


class Confetti:
    """Particle burst fired upward from the bottom-centre of the window"""

    def __init__(self, burst: Celebration, width: int, height: int, lifetime: float = 2.5,
                 rng: Optional[np.random.Generator] = None) -> None:
        rng = rng or np.random.default_rng()
        n = burst.particle_count
        half = burst.spread / 2.0
        angles = np.radians(90.0 + rng.uniform(-half, half, n))
        speed = rng.uniform(350.0, 800.0, n)
        self.pos = np.tile(np.array([width / 2.0, height * burst.origin_y]), (n, 1))
        self.vel = np.stack([np.cos(angles) * speed, -np.sin(angles) * speed], axis=1)
        self.colors = [hex_to_rgb(burst.colors[i % len(burst.colors)]) for i in range(n)]
        self.age = 0.0
        self.lifetime = lifetime

    @property
    def alive(self) -> bool:
        return self.age < self.lifetime

    def update(self, dt: float) -> None:
        self.vel[:, 1] += GRAVITY * dt
        self.vel *= max(0.0, 1.0 - DRAG * dt)
        self.pos += self.vel * dt
        self.age += dt

    def draw(self, screen: pygame.Surface) -> None:
        for (x, y), color in zip(self.pos, self.colors):
            pygame.draw.rect(screen, color, (int(x), int(y), 6, 4))
