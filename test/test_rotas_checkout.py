from loja_pix.leitor_pix import ler_payload_pix
from decimal import Decimal


def pedido(**kwargs):
    dados = {
        'cliente': 'Maria',
        'telefone': '11977776666',
        'forma_pagamento': 'pix',
        'itens': [
            {'nome': 'Sutiã Renda', 'tamanho': 'M', 'preco': 39.9, 'quantidade': 2},
            {'nome': 'Calcinha Fio', 'tamanho': 'P', 'preco': '19.90', 'quantidade': 1}
        ]
    }
    dados.update(kwargs)
    return dados


def test_checkout_pix(client):
    resp = client.post('/checkout/', json=pedido())

    assert resp.status_code == 200
    assert resp.json['total'] == '99.70'
    assert resp.json['forma_pagamento'] == 'pix'
    assert resp.json['link_whatsapp'].startswith('https://wa.me/5511988887777?text=')
    assert ler_payload_pix(resp.json['pix_payload']).valor == Decimal('99.70')


def test_checkout_parcelado(client):
    resp = client.post('/checkout/', json=pedido(
        forma_pagamento='Parcelado', parcelas=2))

    assert resp.status_code == 200
    assert len(resp.json['parcelas']) == 2
    assert [p['valor'] for p in resp.json['parcelas']] == ['49.85', '49.85']
    assert 'pix_payload' not in resp.json
    assert '📅 *Parcelas:*' in resp.json['mensagem']


def test_checkout_campo_obrigatorio(client):
    dados = pedido()
    del dados['telefone']
    resp = client.post('/checkout/', json=dados)

    assert resp.status_code == 400
    assert resp.json['erro'] == 'Campo obrigatório: telefone'


def test_checkout_item_invalido(client):
    resp = client.post('/checkout/', json=pedido(itens=[
        {'nome': 'Body', 'tamanho': 'G', 'preco': 'abc', 'quantidade': 1}]))

    assert resp.status_code == 400
    assert 'preço' in resp.json['erro']


def test_checkout_quantidade_invalida(client):
    resp = client.post('/checkout/', json=pedido(itens=[
        {'nome': 'Body', 'tamanho': 'G', 'preco': 50, 'quantidade': 0}]))

    assert resp.status_code == 400


def test_checkout_carrinho_vazio(client):
    resp = client.post('/checkout/', json=pedido(itens=[]))

    assert resp.status_code == 400


def test_checkout_parcelas_demais(client):
    resp = client.post('/checkout/', json=pedido(forma_pagamento='parcelado', parcelas=4))

    assert resp.status_code == 422
    assert 'parcelas' in resp.json['erro']


def test_checkout_data_fora_do_prazo(client):
    resp = client.post('/checkout/', json=pedido(
        forma_pagamento='parcelado', parcelas=2, datas={'1': '2099-01-01'}))

    assert resp.status_code == 422
    assert '90 dias' in resp.json['erro']


def test_checkout_datas_invalidas(client):
    resp = client.post('/checkout/', json=pedido(
        forma_pagamento='parcelado', parcelas=2, datas={'segunda': '2026-02-01'}))

    assert resp.status_code == 400


def test_checkout_forma_pagamento_invalida(client):
    resp = client.post('/checkout/', json=pedido(forma_pagamento='boleto'))

    assert resp.status_code == 422


def test_checkout_preco_nao_numerico(client):
    for preco in ('NaN', 'Infinity', 'sNaN'):
        resp = client.post('/checkout/', json=pedido(itens=[
            {'nome': 'Body', 'tamanho': 'G', 'preco': preco, 'quantidade': 1}]))

        assert resp.status_code == 400
        assert resp.json['erro'] == 'Item 0: preço inválido!'
