from io import BytesIO
import base64
import qrcode


def gerar_qr_code_png(payload: str, box_size: int = 10, border: int = 2) -> bytes:
    '''
    Renderiza o payload Pix como QR Code em PNG.
    '''
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=border
    )
    qr.add_data(payload)
    qr.make(fit=True)

    img = qr.make_image(fill_color='black', back_color='white')

    buf = BytesIO()
    img.save(buf, format='PNG')
    return buf.getvalue()


def gerar_qr_code_base64(payload: str) -> str:
    png = gerar_qr_code_png(payload)
    return 'data:image/png;base64,' + base64.b64encode(png).decode('ascii')
