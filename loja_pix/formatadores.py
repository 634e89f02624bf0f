from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from urllib.parse import quote
import re


def formatar_moeda(valor) -> str:
    '''Formata número como moeda brasileira: R$ 1.234,56.'''
    v = Decimal(str(valor)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    texto = f"{v:,.2f}".replace(',', 'X').replace('.', ',').replace('X', '.')
    return f'R$ {texto}'


def _como_data(valor):
    if isinstance(valor, datetime):
        return valor.date()
    if isinstance(valor, date):
        return valor
    return datetime.fromisoformat(str(valor)).date()


def formatar_data(valor) -> str:
    return _como_data(valor).strftime('%d/%m/%Y')


def formatar_data_curta(valor) -> str:
    return _como_data(valor).strftime('%d/%m')


def somente_digitos(texto: str) -> str:
    return re.sub(r'\D', '', texto)


def formatar_telefone(telefone: str) -> str:
    numeros = somente_digitos(telefone)
    if len(numeros) == 11:
        return f'({numeros[:2]}) {numeros[2:7]}-{numeros[7:]}'
    return telefone


def gerar_link_whatsapp(telefone: str, mensagem: str) -> str:
    numeros = somente_digitos(telefone)
    if not numeros.startswith('55'):
        numeros = f'55{numeros}'
    texto = quote(mensagem, safe="!*'()")
    return f'https://wa.me/{numeros}?text={texto}'
