import time

import pygame
from loguru import logger

from .config import DisplayConfig
from .simulation import Simulation


def run_display(
    sim: Simulation,
    max_generations: int,
    display: DisplayConfig = DisplayConfig(),
) -> int:
    """Step ``sim`` in a pygame window until the limit, extinction, or quit.

    Returns the generation reached.
    """
    grid = sim.grid
    pygame.init()

    window = pygame.display.set_mode((display.window_width, display.window_height))
    pygame.display.set_caption("Conway's Game of Life")

    # Calculate cell size
    cell_height = display.window_height // max(grid.rows, 1)
    cell_width = display.window_width // max(grid.cols, 1)
    border_size = 1

    cell_fill_color = pygame.Color(display.cell_color)
    background_fill_color = pygame.Color(display.background_color)

    running = True
    try:
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key in (pygame.K_ESCAPE, pygame.K_q):
                        running = False

            if not running:
                logger.info(f"Display closed at generation {sim.generation}")
                break

            window.fill(background_fill_color)

            for row, col in grid.alive_cells():
                x = col * cell_width + border_size
                y = row * cell_height + border_size
                width = cell_width - 2 * border_size
                height = cell_height - 2 * border_size

                # Avoid drawing zero-size or negative rectangles
                if width > 0 and height > 0:
                    pygame.draw.rect(window, cell_fill_color, (x, y, width, height))

            pygame.display.flip()
            time.sleep(display.pause)

            if sim.generation >= max_generations or not sim.is_any_cell_alive():
                logger.info(f"Display stopped at generation {sim.generation}")
                break
            sim.step()
    finally:
        pygame.quit()

    return sim.generation
