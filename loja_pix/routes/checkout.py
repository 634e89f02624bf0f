from flask import Blueprint, current_app, jsonify
from loja_pix.checkout import fechar_pedido
from loja_pix.error import ErroCheckout, ErroPayloadPix
from loja_pix.validation import validar_json, validar_itens
from loja_pix.log import configurar_logging
from loja_pix.limiter import limiter
import logging


configurar_logging()
logger = logging.getLogger(__name__)


checkout_bp = Blueprint('checkout', __name__)


@checkout_bp.route('/', methods=['POST'])
@limiter.limit(lambda: current_app.config['LIMITE_REQUISICOES'])
def finalizar_pedido():
    try:
        logger.info('Finalizando pedido...')

        dados = validar_json()
        if isinstance(dados, tuple):
            return dados

        faltando = [c for c in ('cliente', 'telefone', 'forma_pagamento', 'itens')
                    if c not in dados or dados[c] is None]
        if faltando:
            logger.warning(f"Campo obrigatório: {', '.join(faltando)}")
            return jsonify({'erro': f"Campo obrigatório: {', '.join(faltando)}"}), 400

        for campo in ('cliente', 'telefone', 'forma_pagamento'):
            if not isinstance(dados[campo], str):
                logger.warning(f'Valor inválido para {campo}: {dados.get(campo)}')
                return jsonify({'erro': f'Valor inválido para {campo}!'}), 400

        itens, erro = validar_itens(dados['itens'])
        if erro:
            logger.warning(f'Itens inválidos: {erro}')
            return jsonify({'erro': erro}), 400

        parcelas = dados.get('parcelas', 1)
        if not isinstance(parcelas, int) or isinstance(parcelas, bool):
            logger.warning(f'Valor inválido para parcelas: {parcelas}')
            return jsonify({'erro': 'Valor inválido para parcelas!'}), 400

        datas = dados.get('datas') or {}
        if not isinstance(datas, dict) or not all(str(k).isdigit() for k in datas):
            logger.warning(f'Valor inválido para datas: {datas}')
            return jsonify({'erro': 'Valor inválido para datas!'}), 400

        pedido = fechar_pedido(
            cliente=dados['cliente'],
            telefone=dados['telefone'],
            forma_pagamento=dados['forma_pagamento'].strip().lower(),
            itens=itens,
            config=current_app.config,
            quantidade_parcelas=parcelas,
            datas_escolhidas=datas
        )

        logger.info('Pedido finalizado com sucesso.')
        return jsonify(pedido), 200

    except (ErroCheckout, ErroPayloadPix) as erro:
        logger.warning(f'Pedido inválido: {str(erro)}')
        return jsonify({'erro': str(erro)}), 422

    except Exception as erro:
        logger.error(f'Erro inesperado ao finalizar pedido: {str(erro)}')
        return jsonify({'erro': 'Erro inesperado ao finalizar pedido!'}), 500
