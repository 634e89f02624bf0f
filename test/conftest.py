from loja_pix import create_app
import pytest


CONFIG_TESTE = {
    'TESTING': True,
    'RATELIMIT_ENABLED': False,
    'PIX_CHAVE': '11999999999',
    'NOME_LOJA': 'LOJA TESTE',
    'CIDADE_LOJA': 'SAO PAULO',
    'WHATSAPP_NUMERO': '11988887777'
}


@pytest.fixture
def app():
    return create_app(CONFIG_TESTE)


@pytest.fixture
def client(app):
    with app.app_context():
        with app.test_client() as client:
            yield client


@pytest.fixture
def config_loja():
    return dict(CONFIG_TESTE)
