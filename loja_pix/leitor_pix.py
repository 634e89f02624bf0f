from decimal import Decimal, InvalidOperation
from loja_pix.error import PayloadInvalido, CrcInvalido
from loja_pix.gerador_pix import (GUI_PIX, PREFIXO_CRC, TXID_PADRAO,
                                  RequisicaoPix, crc16)
from loja_pix.log import configurar_logging
import logging
import re


configurar_logging()
logger = logging.getLogger(__name__)


ORDEM_CAMPOS = ['00', '01', '26', '52', '53', '54', '58', '59', '60', '62', '63']
OBRIGATORIOS = ['00', '26', '52', '53', '58', '59', '60', '62', '63']

HEX_CRC = re.compile(r'^[0-9A-F]{4}$')


def ler_campos_emv(texto: str) -> list:
    '''
    Separa uma sequência TLV em pares (id, valor), na ordem em que aparecem.
    '''
    campos = []
    pos = 0

    while pos < len(texto):
        cabecalho = texto[pos:pos + 4]

        if len(cabecalho) < 4 or not cabecalho.isdigit():
            raise PayloadInvalido(f'Cabeçalho TLV inválido na posição {pos}')

        id_, tamanho = cabecalho[:2], int(cabecalho[2:])
        inicio = pos + 4
        fim = inicio + tamanho

        if fim > len(texto):
            raise PayloadInvalido(
                f'Campo {id_} declara {tamanho} caracteres, restam {len(texto) - inicio}')

        campos.append((id_, texto[inicio:fim]))
        pos = fim

    return campos


def crc_valido(payload: str) -> bool:
    if len(payload) < 8 or payload[-8:-4] != PREFIXO_CRC:
        return False
    return crc16(payload[:-4]) == payload[-4:]


def _verificar_ordem(ids):
    faltando = [i for i in OBRIGATORIOS if i not in ids]
    if faltando:
        raise PayloadInvalido(f"Campos obrigatórios ausentes: {', '.join(faltando)}")

    if len(set(ids)) != len(ids):
        raise PayloadInvalido('Campo repetido no payload')

    desconhecidos = [i for i in ids if i not in ORDEM_CAMPOS]
    if desconhecidos:
        raise PayloadInvalido(f"Campos não suportados: {', '.join(desconhecidos)}")

    if ids != sorted(ids, key=ORDEM_CAMPOS.index):
        raise PayloadInvalido('Campos fora de ordem')


def ler_payload_pix(payload: str) -> RequisicaoPix:
    payload = payload.strip()

    if len(payload) < 8 or payload[-8:-4] != PREFIXO_CRC:
        raise PayloadInvalido('Payload não termina com o campo CRC (6304)')

    recebido = payload[-4:]
    if not HEX_CRC.match(recebido):
        raise PayloadInvalido(f'CRC malformado: {recebido}')

    esperado = crc16(payload[:-4])
    if esperado != recebido:
        logger.warning(f'CRC divergente: esperado={esperado} recebido={recebido}')
        raise CrcInvalido(esperado, recebido)

    campos = ler_campos_emv(payload)
    _verificar_ordem([id_ for id_, _ in campos])
    dados = dict(campos)

    if dados['00'] != '01':
        raise PayloadInvalido(f"Indicador de formato inválido: {dados['00']}")

    conta = dict(ler_campos_emv(dados['26']))
    if conta.get('00', '').lower() != GUI_PIX or '01' not in conta:
        raise PayloadInvalido('Informações da conta Pix inválidas (campo 26)')

    adicionais = dict(ler_campos_emv(dados['62']))

    valor = None
    if '54' in dados:
        try:
            valor = Decimal(dados['54'])
        except InvalidOperation:
            raise PayloadInvalido(f"Valor inválido no campo 54: {dados['54']}")

    return RequisicaoPix(
        chave_pix=conta['01'],
        nome_recebedor=dados['59'],
        cidade_recebedor=dados['60'],
        valor=valor,
        txid=adicionais.get('05', TXID_PADRAO)
    )
