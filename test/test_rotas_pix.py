from loja_pix.gerador_pix import crc16


PAYLOAD_PEDIDO = (
    '00020126330014br.gov.bcb.pix0111119999999995204000053039865404'
    '10.005802BR5910LOJA TESTE6009SAO PAULO62100506PED0016304F41F'
)


def test_gerar_pix_com_valor(client):
    resp = client.post('/pix/', json={'valor': 10, 'txid': 'PED001'})

    assert resp.status_code == 201
    assert resp.json['payload'] == PAYLOAD_PEDIDO
    assert resp.json['valor'] == '10.00'
    assert resp.json['txid'] == 'PED001'
    assert resp.json['qr_code'].startswith('data:image/png;base64,')


def test_gerar_pix_sem_valor(client):
    resp = client.post('/pix/', json={})

    assert resp.status_code == 201
    assert resp.json['valor'] is None
    assert resp.json['txid'] == '***'
    assert '62070503***6304' in resp.json['payload']


def test_gerar_pix_valor_nao_numerico_e_omitido(client):
    resp = client.post('/pix/', json={'valor': 'abc'})

    assert resp.status_code == 201
    assert resp.json['valor'] is None
    assert '5802BR' in resp.json['payload']


def test_gerar_pix_com_recebedor_informado(client):
    resp = client.post('/pix/', json={
        'chave_pix': 'loja@exemplo.com',
        'nome_recebedor': 'Outra Loja',
        'cidade_recebedor': 'Curitiba'
    })

    payload = resp.json['payload']
    assert resp.status_code == 201
    assert '0116loja@exemplo.com' in payload
    assert '5910Outra Loja' in payload
    assert '6008Curitiba' in payload
    assert crc16(payload[:-4]) == payload[-4:]


def test_gerar_pix_sem_chave_configurada(app):
    app.config['PIX_CHAVE'] = ''
    with app.test_client() as client:
        resp = client.post('/pix/', json={'valor': 10})

    assert resp.status_code == 422
    assert 'erro' in resp.json


def test_gerar_pix_chave_muito_longa(client):
    resp = client.post('/pix/', json={'chave_pix': 'a' * 78})

    assert resp.status_code == 422
    assert '26' in resp.json['erro']


def test_gerar_pix_chave_com_acento(client):
    resp = client.post('/pix/', json={'chave_pix': 'joão@exemplo.com'})

    assert resp.status_code == 422


def test_gerar_pix_campo_texto_invalido(client):
    resp = client.post('/pix/', json={'txid': 123})

    assert resp.status_code == 400
    assert resp.json['erro'] == 'Valor inválido para txid!'


def test_gerar_pix_sem_json(client):
    resp = client.post('/pix/', data='valor=10')

    assert resp.status_code == 400
    assert 'erro' in resp.json


def test_gerar_pix_json_malformado(client):
    resp = client.post('/pix/', data='{valor: ', content_type='application/json')

    assert resp.status_code == 400


def test_gerar_pix_metodo_errado(client):
    resp = client.get('/pix/')

    assert resp.status_code == 405
    assert 'erro' in resp.json


def test_gerar_qr_code(client):
    resp = client.post('/pix/qrcode', json={'valor': 25.5})

    assert resp.status_code == 200
    assert resp.mimetype == 'image/png'
    assert resp.data[:4] == b'\x89PNG'


def test_gerar_qr_code_chave_muito_longa(client):
    resp = client.post('/pix/qrcode', json={'chave_pix': 'a' * 78})

    assert resp.status_code == 422


def test_validar_pix(client):
    resp = client.post('/pix/validar', json={'payload': PAYLOAD_PEDIDO})

    assert resp.status_code == 200
    assert resp.json == {
        'valido': True,
        'chave_pix': '11999999999',
        'nome_recebedor': 'LOJA TESTE',
        'cidade_recebedor': 'SAO PAULO',
        'valor': '10.00',
        'txid': 'PED001'
    }


def test_validar_pix_crc_errado(client):
    resp = client.post('/pix/validar', json={'payload': PAYLOAD_PEDIDO[:-4] + 'AAAA'})

    assert resp.status_code == 422
    assert resp.json['valido'] is False


def test_validar_pix_sem_payload(client):
    resp = client.post('/pix/validar', json={'outro': 1})

    assert resp.status_code == 400


def test_rota_inexistente(client):
    resp = client.get('/nao-existe')

    assert resp.status_code == 404
    assert resp.json == {'erro': 'Rota não encontrada!'}


def test_gerar_pix_valor_enorme(client):
    resp = client.post('/pix/', json={'valor': '1e120'})

    assert resp.status_code == 422
    assert '54' in resp.json['erro']


def test_gerar_pix_valor_grande(client):
    resp = client.post('/pix/', json={'valor': 1e26})

    assert resp.status_code == 201
    assert resp.json['valor'] == '1' + '0' * 26 + '.00'
