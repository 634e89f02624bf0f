from flask import Blueprint, current_app, jsonify, send_file
from io import BytesIO
from loja_pix.error import ErroPayloadPix
from loja_pix.gerador_pix import (RequisicaoPix, TXID_PADRAO,
                                  formatar_valor, gerar_payload_pix)
from loja_pix.gerador_qr_code import gerar_qr_code_png, gerar_qr_code_base64
from loja_pix.leitor_pix import ler_payload_pix
from loja_pix.validation import validar_json
from loja_pix.log import configurar_logging
from loja_pix.limiter import limiter
import logging


configurar_logging()
logger = logging.getLogger(__name__)


pix_bp = Blueprint('pix', __name__)


CAMPOS_TEXTO = ['chave_pix', 'nome_recebedor', 'cidade_recebedor', 'txid']


def _montar_requisicao(dados):
    '''
    Monta a RequisicaoPix com os dados do corpo, usando as configurações
    da loja para os campos do recebedor que não vierem na requisição.
    Retorna (requisicao, None) ou (None, resposta de erro).
    '''
    for campo in CAMPOS_TEXTO:
        if dados.get(campo) is not None and not isinstance(dados[campo], str):
            logger.warning(f'Valor inválido para {campo}: {dados.get(campo)}')
            return None, (jsonify({'erro': f'Valor inválido para {campo}!'}), 400)

    config = current_app.config

    chave = (dados.get('chave_pix') or config['PIX_CHAVE']).strip()
    if not chave:
        logger.warning('Chave Pix não informada e não configurada.')
        return None, (jsonify({'erro': 'Chave Pix não configurada!'}), 422)

    return RequisicaoPix(
        chave_pix=chave,
        nome_recebedor=dados.get('nome_recebedor') or config['NOME_LOJA'],
        cidade_recebedor=dados.get('cidade_recebedor') or config['CIDADE_LOJA'],
        valor=dados.get('valor'),
        txid=dados.get('txid') or TXID_PADRAO
    ), None


@pix_bp.route('/', methods=['POST'])
@limiter.limit(lambda: current_app.config['LIMITE_REQUISICOES'])
def gerar_pix():
    try:
        logger.info('Gerando payload Pix...')

        dados = validar_json()
        if isinstance(dados, tuple):
            return dados

        requisicao, erro = _montar_requisicao(dados)
        if erro:
            return erro

        payload = gerar_payload_pix(requisicao)

        logger.info(f'Payload Pix gerado com sucesso (txid={requisicao.txid}).')
        return jsonify({
            'payload': payload,
            'txid': requisicao.txid[:25],
            'valor': formatar_valor(requisicao.valor),
            'qr_code': gerar_qr_code_base64(payload)
        }), 201

    except ErroPayloadPix as erro:
        logger.warning(f'Dados inválidos para o payload Pix: {str(erro)}')
        return jsonify({'erro': str(erro)}), 422

    except Exception as erro:
        logger.error(f'Erro inesperado ao gerar payload Pix: {str(erro)}')
        return jsonify({'erro': 'Erro inesperado ao gerar payload Pix!'}), 500


@pix_bp.route('/qrcode', methods=['POST'])
@limiter.limit(lambda: current_app.config['LIMITE_REQUISICOES'])
def gerar_qr_code():
    try:
        logger.info('Gerando QR Code Pix...')

        dados = validar_json()
        if isinstance(dados, tuple):
            return dados

        requisicao, erro = _montar_requisicao(dados)
        if erro:
            return erro

        png = gerar_qr_code_png(gerar_payload_pix(requisicao))

        logger.info('QR Code Pix gerado com sucesso.')
        return send_file(BytesIO(png), mimetype='image/png')

    except ErroPayloadPix as erro:
        logger.warning(f'Dados inválidos para o QR Code Pix: {str(erro)}')
        return jsonify({'erro': str(erro)}), 422

    except Exception as erro:
        logger.error(f'Erro inesperado ao gerar QR Code Pix: {str(erro)}')
        return jsonify({'erro': 'Erro inesperado ao gerar QR Code Pix!'}), 500


@pix_bp.route('/validar', methods=['POST'])
@limiter.limit(lambda: current_app.config['LIMITE_REQUISICOES'])
def validar_pix():
    try:
        logger.info('Validando payload Pix...')

        dados = validar_json()
        if isinstance(dados, tuple):
            return dados

        payload = dados.get('payload')
        if not isinstance(payload, str) or not payload.strip():
            logger.warning('Campo obrigatório: payload')
            return jsonify({'erro': 'Campo obrigatório: payload'}), 400

        requisicao = ler_payload_pix(payload)

        logger.info('Payload Pix válido.')
        return jsonify({
            'valido': True,
            'chave_pix': requisicao.chave_pix,
            'nome_recebedor': requisicao.nome_recebedor,
            'cidade_recebedor': requisicao.cidade_recebedor,
            'valor': formatar_valor(requisicao.valor),
            'txid': requisicao.txid
        }), 200

    except ErroPayloadPix as erro:
        logger.warning(f'Payload Pix inválido: {str(erro)}')
        return jsonify({'erro': str(erro), 'valido': False}), 422

    except Exception as erro:
        logger.error(f'Erro inesperado ao validar payload Pix: {str(erro)}')
        return jsonify({'erro': 'Erro inesperado ao validar payload Pix!'}), 500
