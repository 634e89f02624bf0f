from loja_pix import create_app
from loja_pix.config import Config


def main():
    app = create_app()
    app.run(debug=True, port=Config.PORTA, use_reloader=False)


if __name__ == '__main__':
    main()
