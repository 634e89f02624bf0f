from logging.handlers import RotatingFileHandler
from loja_pix.config import Config
import os
import logging


def configurar_logging():
    logger = logging.getLogger()

    if any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        return

    if not os.path.exists(Config.LOG_DIR):
        os.makedirs(Config.LOG_DIR)

    nivel = logging.getLevelName(str(Config.LOG_NIVEL).upper())
    logger.setLevel(nivel if isinstance(nivel, int) else logging.INFO)

    file_handler = RotatingFileHandler(
        os.path.join(Config.LOG_DIR, 'app.log'),
        maxBytes=2000000,
        backupCount=5
    )

    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter(
        '[%(asctime)s] [%(levelname)s] - [%(message)s]'
    ))

    console = logging.StreamHandler()
    console.setLevel(logging.DEBUG)
    console.setFormatter(logging.Formatter(
        '%(levelname)s: %(message)s'
    ))

    logger.addHandler(file_handler)
    logger.addHandler(console)
