from __future__ import annotations

import argparse
import logging

import pygame

from roofrun_rl.game import GameSession, GameState, SessionConfig
from .renderer import Renderer


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Roofrun with the mouse")
    p.add_argument("--size", type=int, default=6, help="Initial grid size (5-12)")
    p.add_argument("--time_limit", type=float, default=30.0)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--verbose", action="store_true")
    return p


def run(config: SessionConfig | None = None) -> None:
    session = GameSession(config)
    renderer = Renderer()
    pygame.init()
    try:
        clock = pygame.time.Clock()
        screen = pygame.display.set_mode(renderer.window_size)
        pygame.display.set_caption("Roofrun - Human Play")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_SPACE and session.state != GameState.PLAYING:
                        session.start()
                    elif event.key == pygame.K_n:
                        session.reset()
                    elif event.key in (pygame.K_UP, pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                        if session.grid_size < session.config.max_grid_size:
                            session.set_grid_size(session.grid_size + 1)
                    elif event.key in (pygame.K_DOWN, pygame.K_MINUS, pygame.K_KP_MINUS):
                        if session.grid_size > session.config.min_grid_size:
                            session.set_grid_size(session.grid_size - 1)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    cell = renderer.cell_at(event.pos, session.game.grid_size)
                    if cell is not None:
                        session.click(*cell)

            session.update()
            renderer.draw(screen, session)
            clock.tick(60)
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    run(SessionConfig(grid_size=args.size, time_limit=args.time_limit, random_seed=args.seed))


if __name__ == "__main__":  # pragma: no cover
    main()
