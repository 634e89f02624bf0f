from flask import Flask
from loja_pix.config import Config
from loja_pix.routes.pix import pix_bp
from loja_pix.routes.checkout import checkout_bp
from loja_pix.error import register_erro_handlers
from loja_pix.limiter import limiter


def create_app(config=None):
    app = Flask('loja_pix')

    app.config.from_object(Config)
    app.config.setdefault('RATELIMIT_STORAGE_URI', 'memory://')

    if config:
        app.config.update(config)

    limiter.init_app(app)

    app.register_blueprint(pix_bp, url_prefix='/pix')
    app.register_blueprint(checkout_bp, url_prefix='/checkout')

    register_erro_handlers(app)

    return app
