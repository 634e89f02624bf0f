from flask import jsonify, request
from flask_limiter.errors import RateLimitExceeded
from loja_pix.log import configurar_logging
import logging


configurar_logging()
logger = logging.getLogger(__name__)


class ErroPayloadPix(ValueError):
    '''Falha ao montar ou ler um payload Pix.'''


class ValorMuitoLongo(ErroPayloadPix):
    def __init__(self, id_campo, tamanho):
        self.id_campo = id_campo
        self.tamanho = tamanho
        super().__init__(
            f'Campo {id_campo} com {tamanho} caracteres (máximo 99)')


class CaractereInvalido(ErroPayloadPix):
    def __init__(self, campo):
        self.campo = campo
        super().__init__(f'Campo {campo} contém caracteres fora do ASCII')


class PayloadInvalido(ErroPayloadPix):
    pass


class CrcInvalido(PayloadInvalido):
    def __init__(self, esperado, recebido):
        self.esperado = esperado
        self.recebido = recebido
        super().__init__(f'CRC inválido: esperado {esperado}, recebido {recebido}')


class ErroCheckout(ValueError):
    '''Dados do pedido não respeitam as regras do checkout.'''


def register_erro_handlers(app):
    @app.errorhandler(404)
    def rota_nao_encontrado(erro):
        logger.warning(f'Rota não encontrada: {str(erro)}')
        return jsonify({'erro': 'Rota não encontrada!'}), 404

    @app.errorhandler(RateLimitExceeded)
    def rate_limit_handler(e):
        logger.warning(
            f"RATE LIMIT excedido | IP={request.remote_addr} | rota={request.path}"
        )
        return jsonify({
            'erro': 'Muitas requisições. Tente novamente mais tarde.'
        }), 429

    @app.errorhandler(400)
    def dados_invalidos(erro):
        logger.warning(f'Dados inválidos na rota: {str(erro)}')
        return jsonify({'erro': 'Dados inválidos na rota!'}), 400

    @app.errorhandler(405)
    def metodo_errado(erro):
        logger.warning(f'Método HTTP não permitido nesta rota: {str(erro)}')
        return jsonify({'erro': 'Método HTTP não permitido nesta rota!'}), 405

    @app.errorhandler(Exception)
    def erro_interno(erro):
        logger.error(f'Erro inesperado ao acessar a rota: {str(erro)}')
        return jsonify({'erro': 'Erro inesperado ao acessar a rota!'}), 500
