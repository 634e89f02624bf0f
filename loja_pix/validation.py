from flask import jsonify, request
from decimal import Decimal, InvalidOperation
from loja_pix.checkout import ItemPedido
from loja_pix.log import configurar_logging
from werkzeug.exceptions import BadRequest
import logging


configurar_logging()
logger = logging.getLogger(__name__)


def validar_json():
    try:
        if not request.is_json:
            logger.warning('Requisição deve ser Content_type: application/json.')
            return jsonify(
                {'erro': 'Requisição deve ser Content-type: application/json!'}), 400

        dados = request.get_json()
        if not isinstance(dados, dict):
            logger.warning('Dados ausentes ou inválidos no corpo da requisição.')
            return jsonify(
                {'erro': 'Dados ausentes ou inválidos no corpo da requisição!'}), 400

        return dados
    except BadRequest:
        logger.warning(f'JSON malformado! Dados inválidos no corpo da requisição.')
        return jsonify({'erro': 'JSON malformado. Dados inválidos!'}), 400


def validar_itens(itens):
    '''
    Converte a lista de itens do carrinho em ItemPedido.
    Retorna (itens, None) ou (None, mensagem de erro).
    '''
    if not isinstance(itens, list) or not itens:
        return None, 'Carrinho vazio!'

    REGRAS = {
        'nome': lambda v: isinstance(v, str) and v.strip() != '',
        'tamanho': lambda v: isinstance(v, str),
        'preco': lambda v: v > 0,
        'quantidade': lambda v: isinstance(v, int) and v > 0
    }

    convertidos = []
    for i, item in enumerate(itens):
        if not isinstance(item, dict):
            return None, f'Item {i} inválido!'

        faltando = [c for c in REGRAS if c not in item or item[c] is None]
        if faltando:
            return None, f"Item {i}: campo obrigatório {', '.join(faltando)}"

        try:
            preco = Decimal(str(item['preco'])).quantize(Decimal('0.01'))
            if not preco.is_finite():
                raise InvalidOperation
        except (InvalidOperation, ValueError):
            return None, f'Item {i}: preço inválido!'

        valores = dict(item, preco=preco)
        for campo, regra in REGRAS.items():
            if not regra(valores[campo]):
                return None, f'Item {i}: valor inválido para {campo}!'

        convertidos.append(ItemPedido(
            nome=valores['nome'].strip(),
            tamanho=valores['tamanho'].strip(),
            preco=preco,
            quantidade=valores['quantidade']
        ))

    return convertidos, None
