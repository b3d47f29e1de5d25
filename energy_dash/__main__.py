import argparse
import logging
import os

import pygame

from .config import CHARACTERS, DEFAULT_CHARACTER, GameConfig
from .driver import FrameDriver
from .game import EnergyDash
from .render import Renderer
from .scores import ScoreStore
from .state import GameState

PRESS_KEYS = (pygame.K_SPACE, pygame.K_UP)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="energy_dash", description="Play Energy Dash in a window.")
    parser.add_argument("--scores", default="energy_dash_scores.json", help="leaderboard file")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--character", default=DEFAULT_CHARACTER, choices=sorted(CHARACTERS))
    parser.add_argument("--width", type=int, default=800)
    parser.add_argument("--height", type=int, default=600)
    parser.add_argument("--fps", type=int, default=60)
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if os.getenv("SDL_VIDEODRIVER") == "dummy":
        print("Cannot run interactive play with SDL_VIDEODRIVER=dummy.")
        print("Unset SDL_VIDEODRIVER to open a window.")
        return 1

    config = GameConfig(width=args.width, height=args.height)
    store = ScoreStore(args.scores, capacity=config.leaderboard_size)
    game = EnergyDash(config, seed=args.seed, store=store, character=args.character)

    pygame.init()
    pygame.display.set_caption("Energy Dash")
    screen = pygame.display.set_mode((config.width, config.height), pygame.RESIZABLE)
    renderer = Renderer(config.width, config.height, surface=screen)

    def render(g):
        renderer.draw(g.snapshot(), g.leaderboard())
        if g.game_state is GameState.GAME_OVER and g.is_high_score:
            prompt = renderer.font_large.render(f"NAME: {name}_", True, (255, 255, 255))
            screen.blit(prompt, prompt.get_rect(center=(screen.get_width() / 2, screen.get_height() * 0.65)))
        pygame.display.flip()

    driver = FrameDriver(game, render, fps=args.fps)

    print(EnergyDash.__doc__.splitlines()[0])
    print("Controls: SPACE / UP / click / tap to start and jump. Type a name and ENTER to save a high score.")

    name = ""
    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                renderer.resize(event.w, event.h, surface=screen)
                game.resize(event.w, event.h)
            elif game.game_state is GameState.GAME_OVER and game.is_high_score and event.type == pygame.KEYDOWN:
                # Name entry for the leaderboard
                if event.key == pygame.K_RETURN:
                    if game.confirm_save(name):
                        name = ""
                    else:
                        print("Please enter your name to save your high score!")
                elif event.key == pygame.K_BACKSPACE:
                    name = name[:-1]
                elif event.unicode and event.unicode.isprintable() and len(name) < 16:
                    name += event.unicode
            elif event.type == pygame.KEYDOWN and event.key in PRESS_KEYS:
                game.press()
            elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.FINGERDOWN):
                game.press()

        driver.tick()

    pygame.quit()
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
