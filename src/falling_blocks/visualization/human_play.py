from __future__ import annotations

import argparse
from collections import deque
from typing import Deque, Dict, Optional

import pygame

from falling_blocks.game import Command, GameConfig, GameSession, GravityTimer
from .renderer import Renderer


KEY_TO_COMMAND: Dict[int, Command] = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_UP: Command.ROTATE,
    pygame.K_SPACE: Command.ROTATE,
    pygame.K_p: Command.TOGGLE_PAUSE,
    pygame.K_RETURN: Command.START,
    pygame.K_r: Command.RESTART,
}


def drain_commands(session: GameSession, timer: GravityTimer, pending: Deque[Command], now_ms: int) -> int:
    """Queue a due gravity tick behind pending input, then apply everything in order."""
    if timer.poll(session, now_ms):
        pending.append(Command.TICK)
    applied = 0
    while pending:
        session.dispatch(pending.popleft())
        applied += 1
    return applied


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Falling Blocks")
    p.add_argument("--width", type=int, default=10)
    p.add_argument("--height", type=int, default=20)
    p.add_argument("--tick_ms", type=int, default=1000)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell_size", type=int, default=28)
    return p


def run(argv: Optional[list] = None) -> None:
    args = build_parser().parse_args(argv)
    config = GameConfig(
        width=args.width,
        height=args.height,
        tick_interval_ms=args.tick_ms,
        random_seed=args.seed,
    )
    session = GameSession(config)
    timer = GravityTimer(config.tick_interval_ms)
    renderer = Renderer(cell_size=args.cell_size)
    # Input and gravity share one queue, drained one command at a time
    pending: Deque[Command] = deque()

    pygame.init()
    try:
        clock = pygame.time.Clock()
        screen = pygame.display.set_mode(renderer.window_size(config.width, config.height))
        pygame.display.set_caption("Falling Blocks")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        command = KEY_TO_COMMAND.get(event.key)
                        if command is not None:
                            pending.append(command)

            drain_commands(session, timer, pending, pygame.time.get_ticks())

            renderer.draw(screen, session)
            clock.tick(60)
    finally:
        timer.cancel()
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
