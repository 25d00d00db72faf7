# src/game/game.py
import sys, argparse, logging
import pygame
from pygame import K_SPACE, K_ESCAPE
from .config import WIDTH, HEIGHT, FPS, MAX_DT, WINDOW_TITLE, SEED_DEFAULT
from .logger import setup_logging
from .render import Renderer
from .simulation import Geometry, new_state, update

log = logging.getLogger(__name__)


def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None,
                   help="Obstacle seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--log-level", type=str, default="info",
                   choices=["debug", "info", "warning", "error"])
    p.add_argument("--per-pair-offsets", action="store_true",
                   help="Draw a separate vertical offset for each recycled pair.")
    return p.parse_args()


def run():
    args = parse_args()
    setup_logging(args.log_level)

    # Resolve seed: None -> use SEED_DEFAULT; -1 -> random
    if args.seed is None:
        launch_seed = SEED_DEFAULT
    elif args.seed == -1:
        launch_seed = None
    else:
        launch_seed = args.seed

    pygame.init()
    pygame.display.set_caption(WINDOW_TITLE)
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    renderer = Renderer(screen)

    w, h = screen.get_size()
    state = new_state(launch_seed, Geometry(float(w), float(h)),
                      per_pair_offsets=args.per_pair_offsets)
    log.info("world %dx%d, seed=%s", w, h, launch_seed)

    while True:
        dt = clock.tick(FPS) / 1000.0
        if dt > MAX_DT:  # clamp stalls
            dt = MAX_DT

        # KEYDOWN fires once per press -> edge-triggered flap
        flap = False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if event.key == K_SPACE:
                    flap = True

        snap = update(state, dt, flap)
        renderer.draw(snap)
        pygame.display.flip()


if __name__ == "__main__":
    run()
