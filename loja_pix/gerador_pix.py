'''
Payload Pix Cópia e Cola (BR Code) conforme padrão BACEN (EMV-Co).

Cada campo é um TLV: ID com 2 dígitos, tamanho com 2 dígitos e o valor.
O payload termina no campo 63, cujo valor é o CRC16/CCITT-FALSE calculado
sobre todo o texto anterior, incluindo o prefixo "6304".
'''
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Optional, Union
from loja_pix.error import ErroPayloadPix, ValorMuitoLongo, CaractereInvalido
import unicodedata
import crcmod


GUI_PIX = 'br.gov.bcb.pix'
TXID_PADRAO = '***'

MAX_NOME = 25
MAX_CIDADE = 15
MAX_TXID = 25
MAX_VALOR_CAMPO = 99

PREFIXO_CRC = '6304'

# CRC-16/CCITT-FALSE: sem reflexão e sem XOR final
_crc16_ccitt = crcmod.mkCrcFun(0x11021, initCrc=0xFFFF, rev=False, xorOut=0x0000)


@dataclass(frozen=True)
class RequisicaoPix:
    chave_pix: str
    nome_recebedor: str
    cidade_recebedor: str
    valor: Optional[Union[Decimal, float, int, str]] = None
    txid: Optional[str] = TXID_PADRAO


def emv(id_: str, valor: str) -> str:
    if len(id_) != 2 or not id_.isdigit():
        raise ErroPayloadPix(f'ID de campo inválido: {id_!r}')

    if len(valor) > MAX_VALOR_CAMPO:
        raise ValorMuitoLongo(id_, len(valor))

    tamanho = f"{len(valor):02d}"
    return f"{id_}{tamanho}{valor}"


def crc16(payload: str) -> str:
    # Cada caractere entra com o byte menos significativo do seu código
    dados = bytes(ord(c) & 0xFF for c in payload)
    crc = _crc16_ccitt(dados)
    return f"{crc:04X}"


def remover_acentos(texto: str) -> str:
    nfkd = unicodedata.normalize('NFKD', texto)
    return ''.join(c for c in nfkd if not unicodedata.combining(c))


def formatar_valor(valor) -> Optional[str]:
    '''
    Retorna o valor com duas casas decimais (ROUND_HALF_UP) ou None
    quando ausente, não numérico ou não positivo após o arredondamento.
    '''
    if valor is None or isinstance(valor, bool):
        return None

    try:
        decimal = Decimal(str(valor).strip())
    except (InvalidOperation, ValueError, TypeError):
        return None

    if not decimal.is_finite() or decimal <= 0:
        return None

    # Dígitos inteiros, ponto e duas casas
    tamanho = max(decimal.adjusted(), 0) + 4
    if tamanho > MAX_VALOR_CAMPO:
        raise ValorMuitoLongo('54', tamanho)

    with localcontext() as contexto:
        contexto.prec = max(contexto.prec, tamanho)
        decimal = decimal.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)

    if decimal <= 0:
        return None

    return f"{decimal:.2f}"


def _ascii(campo: str, valor: str) -> str:
    if not valor.isascii():
        raise CaractereInvalido(campo)
    return valor


def gerar_payload_pix(requisicao: RequisicaoPix) -> str:
    chave = _ascii('chave_pix', requisicao.chave_pix)
    nome = _ascii(
        'nome_recebedor', remover_acentos(requisicao.nome_recebedor))[:MAX_NOME]
    cidade = _ascii(
        'cidade_recebedor', remover_acentos(requisicao.cidade_recebedor))[:MAX_CIDADE]
    txid = _ascii('txid', requisicao.txid or TXID_PADRAO)[:MAX_TXID]
    valor = formatar_valor(requisicao.valor)

    payload = (
        emv("00", "01") +
        emv(
            "26",
            emv("00", GUI_PIX) +
            emv("01", chave)
        ) +
        emv("52", "0000") +
        emv("53", "986")
    )

    if valor is not None:
        payload += emv("54", valor)

    payload += (
        emv("58", "BR") +
        emv("59", nome) +
        emv("60", cidade) +
        emv("62", emv("05", txid)) +
        PREFIXO_CRC
    )

    return payload + crc16(payload)
