from dotenv import load_dotenv
import os


load_dotenv()


class Config:
    # Dados do recebedor Pix
    PIX_CHAVE = os.getenv('PIX_CHAVE', '')
    NOME_LOJA = os.getenv('NOME_LOJA', 'LINGERIE DA RITA')
    CIDADE_LOJA = os.getenv('CIDADE_LOJA', 'SAO PAULO')

    # Pedidos via WhatsApp
    WHATSAPP_NUMERO = os.getenv('WHATSAPP_NUMERO', '')

    # Logs
    LOG_DIR = os.getenv('LOG_DIR', 'logs')
    LOG_NIVEL = os.getenv('LOG_NIVEL', 'INFO')

    # API
    LIMITE_REQUISICOES = os.getenv('LIMITE_REQUISICOES', '100 per hour')
    PORTA = int(os.getenv('PORTA', '5000'))
