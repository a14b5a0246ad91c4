from __future__ import annotations

import logging
import sys

import pygame

from .config import load_config
from .exceptions import ConfigurationError
from .game import Game, open_window

logger = logging.getLogger(__name__)


# ============================== MAIN LOOP ============================== #
def main() -> int:
    cfg = load_config()
    logging.basicConfig(
        level=getattr(logging, cfg["log_level"], logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("config loaded from %s", cfg["config_path"])

    pygame.init()
    try:
        screen = open_window(cfg)
        pygame.display.set_caption("Rebel Run")
        game = Game(screen, cfg)
    except ConfigurationError as e:
        logger.error("cannot start: %s", e)
        pygame.quit()
        return 2

    try:
        game.run()
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        pygame.quit(); sys.exit(0)
