'''
Fechamento de pedido da vitrine: total do carrinho, agenda de parcelas,
mensagem para o WhatsApp da loja e, no pagamento à vista, o Pix Copia e Cola.
Nada aqui é persistido.
'''
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from dateutil.relativedelta import relativedelta
from loja_pix.error import ErroCheckout
from loja_pix.formatadores import formatar_moeda, formatar_data, gerar_link_whatsapp
from loja_pix.gerador_pix import RequisicaoPix, gerar_payload_pix
from loja_pix.log import configurar_logging
import logging


configurar_logging()
logger = logging.getLogger(__name__)


MAX_PARCELAS = 3
PRAZO_MAXIMO_DIAS = 90

FORMAS_PAGAMENTO = ('pix', 'parcelado')


@dataclass(frozen=True)
class ItemPedido:
    nome: str
    tamanho: str
    preco: Decimal
    quantidade: int

    @property
    def subtotal(self) -> Decimal:
        return self.preco * self.quantidade


def calcular_total(itens) -> Decimal:
    return sum((item.subtotal for item in itens), Decimal('0.00'))


def gerar_txid_pedido(agora: datetime = None) -> str:
    agora = agora or datetime.now()
    milissegundos = str(int(agora.timestamp() * 1000))
    return 'LOJA' + milissegundos[-8:]


def valor_parcela(total: Decimal, quantidade: int) -> Decimal:
    return (Decimal(total) / quantidade).quantize(
        Decimal('0.01'), rounding=ROUND_HALF_UP)


def _ler_data(valor) -> date:
    if isinstance(valor, datetime):
        return valor.date()
    if isinstance(valor, date):
        return valor
    try:
        return date.fromisoformat(str(valor))
    except ValueError:
        raise ErroCheckout(f'Data inválida: {valor}')


def datas_parcelas(quantidade: int, data_compra: date, datas_escolhidas=None) -> list:
    '''
    Vencimentos das parcelas: um mês entre cada uma a partir da compra,
    exceto onde o cliente escolheu outra data (índice a partir de 0).
    Uma data escolhida deve cair entre o dia da compra e 90 dias depois.
    '''
    if not 1 <= quantidade <= MAX_PARCELAS:
        raise ErroCheckout(
            f'Quantidade de parcelas deve ser entre 1 e {MAX_PARCELAS}')

    escolhidas = {int(k): _ler_data(v) for k, v in (datas_escolhidas or {}).items()}

    datas = []
    for i in range(quantidade):
        if i not in escolhidas:
            datas.append(data_compra + relativedelta(months=i))
            continue

        escolhida = escolhidas[i]
        dias = (escolhida - data_compra).days

        if dias > PRAZO_MAXIMO_DIAS:
            raise ErroCheckout(
                f'O prazo máximo é {PRAZO_MAXIMO_DIAS} dias a partir da data da compra')
        if dias < 0:
            raise ErroCheckout('A data não pode ser anterior à compra')

        datas.append(escolhida)

    return datas


def montar_mensagem_pedido(nome_loja, cliente, forma_pagamento, itens,
                           total, parcelas=None) -> str:
    quantidade = len(parcelas) if parcelas else 1
    pagamento = 'Pix' if forma_pagamento == 'pix' else f'{quantidade}x'

    mensagem = f'🛍️ *Novo Pedido - {nome_loja}*\n\n'
    mensagem += f'👤 *Cliente:* {cliente}\n'
    mensagem += f'💳 *Pagamento:* {pagamento}\n\n'
    mensagem += '📦 *Itens:*\n'

    for item in itens:
        mensagem += (f'• {item.nome} ({item.tamanho}) x{item.quantidade}'
                     f' - {formatar_moeda(item.subtotal)}\n')

    mensagem += f'\n💰 *Total: {formatar_moeda(total)}*'

    if forma_pagamento == 'parcelado' and parcelas:
        mensagem += '\n\n📅 *Parcelas:*'
        for numero, valor, vencimento in parcelas:
            mensagem += (f'\n  {numero}x - {formatar_moeda(valor)}'
                         f' ({formatar_data(vencimento)})')

    return mensagem


def fechar_pedido(cliente, telefone, forma_pagamento, itens, config,
                  quantidade_parcelas=1, datas_escolhidas=None, agora=None) -> dict:
    if not cliente or not cliente.strip():
        raise ErroCheckout('Digite seu nome')
    if not telefone or not telefone.strip():
        raise ErroCheckout('Digite seu telefone')
    if forma_pagamento not in FORMAS_PAGAMENTO:
        raise ErroCheckout(f'Forma de pagamento inválida: {forma_pagamento}')
    if not itens:
        raise ErroCheckout('Carrinho vazio')
    if forma_pagamento == 'pix' and not config['PIX_CHAVE']:
        raise ErroCheckout('Chave Pix da loja não configurada')

    agora = agora or datetime.now()
    total = calcular_total(itens)

    if forma_pagamento == 'pix':
        quantidade_parcelas = 1
        vencimentos = [agora.date()]
    else:
        vencimentos = datas_parcelas(
            quantidade_parcelas, agora.date(), datas_escolhidas)

    parcela = valor_parcela(total, quantidade_parcelas)
    parcelas = [(i + 1, parcela, vencimento)
                for i, vencimento in enumerate(vencimentos)]

    mensagem = montar_mensagem_pedido(
        config['NOME_LOJA'], cliente.strip(), forma_pagamento,
        itens, total, parcelas)

    resultado = {
        'total': f'{total:.2f}',
        'forma_pagamento': forma_pagamento,
        'parcelas': [{
            'numero': numero,
            'valor': f'{valor:.2f}',
            'vencimento': vencimento.isoformat()
        } for numero, valor, vencimento in parcelas],
        'mensagem': mensagem,
        'link_whatsapp': None
    }

    if config['WHATSAPP_NUMERO']:
        resultado['link_whatsapp'] = gerar_link_whatsapp(
            config['WHATSAPP_NUMERO'], mensagem)

    if forma_pagamento == 'pix':
        txid = gerar_txid_pedido(agora)
        resultado['txid'] = txid
        resultado['pix_payload'] = gerar_payload_pix(RequisicaoPix(
            chave_pix=config['PIX_CHAVE'],
            nome_recebedor=config['NOME_LOJA'],
            cidade_recebedor=config['CIDADE_LOJA'],
            valor=total,
            txid=txid
        ))

    logger.info(
        f'Pedido fechado: cliente={cliente.strip()} forma={forma_pagamento} total={total:.2f}')
    return resultado
