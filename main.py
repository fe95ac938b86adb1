# main.py

import pygame
import constants
import logging
import logger_setup
import numpy as np
from render_adapter import PygameRenderer
from scene_config import load_config
from scene_controller import SceneController

# Get the application's dedicated logger
logger = logging.getLogger("generative_scene")


def make_surfaces(size):
    """Creates the trail-fade and glow surfaces matching the window size."""
    trail_surface = pygame.Surface(size, pygame.SRCALPHA)
    trail_surface.fill(constants.TRAIL_EFFECT_COLOR)
    glow_surface = pygame.Surface(size, pygame.SRCALPHA)
    return trail_surface, glow_surface


def apply_bloom(screen, glow_surface):
    """Blurs the glow pass by down- and up-scaling, then adds it onto the screen."""
    width, height = screen.get_size()
    scale = constants.BLOOM_RADIUS
    scaled_size = (max(1, width // scale), max(1, height // scale))
    scaled_surface = pygame.transform.smoothscale(glow_surface, scaled_size)
    blurred_surface = pygame.transform.smoothscale(scaled_surface, (width, height))

    intensity = constants.BLOOM_INTENSITY
    blurred_surface.fill((intensity, intensity, intensity), special_flags=pygame.BLEND_RGB_MULT)
    screen.blit(blurred_surface, (0, 0), special_flags=pygame.BLEND_RGB_ADD)


def run_scene_loop(controller, screen, clock):
    """
    The host frame loop. Translates pygame events into scene input events and
    runs exactly one scene tick per displayed frame.
    """
    trail_surface, glow_surface = make_surfaces(screen.get_size())
    renderer = PygameRenderer(screen, glow_surface)
    controller.renderer = renderer

    running = True
    frame = 0
    while running:
        # --- Event handling (applied in arrival order, between ticks) ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                running = False
            elif event.type == pygame.MOUSEMOTION:
                controller.on_pointer_move(*event.pos)
            elif event.type == pygame.WINDOWLEAVE:
                controller.on_pointer_leave()
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                controller.on_click(*event.pos)
            elif event.type == pygame.VIDEORESIZE:
                screen = pygame.display.get_surface()
                trail_surface, glow_surface = make_surfaces(screen.get_size())
                renderer.set_targets(screen, glow_surface)
                controller.on_resize(*screen.get_size())

        # --- Drawing ---
        screen.blit(trail_surface, (0, 0))
        glow_surface.fill((0, 0, 0, 0))

        controller.tick(frame)

        apply_bloom(screen, glow_surface)
        pygame.display.flip()
        clock.tick(constants.FPS)
        frame += 1


def main():
    """
    Main function to initialize and run the generative scene.
    """
    # --- Setup ---
    logger_setup.setup_logging()
    config, scene_config = load_config()

    logger.info("Application starting...")
    logger.info(f"Loaded configuration: {config}")

    # Initialize the master random number generator (RNG)
    rng = np.random.default_rng(config['master_seed'])
    logger.info(f"Master RNG initialized with seed: {config['master_seed']}")

    # --- Initialization ---
    pygame.init()
    screen = pygame.display.set_mode((constants.WIDTH, constants.HEIGHT), pygame.RESIZABLE)
    pygame.display.set_caption(constants.TITLE)
    screen.fill(constants.BACKGROUND)
    clock = pygame.time.Clock()

    controller = SceneController(
        config=scene_config,
        rng=rng,
        viewport=screen.get_size()
    )

    try:
        run_scene_loop(controller, screen, clock)
    finally:
        logger.info("Application shutting down.")
        pygame.quit()


if __name__ == "__main__":
    main()
