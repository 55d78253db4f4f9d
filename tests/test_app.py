"""Tests for the Flask export endpoints."""

from io import BytesIO

import pytest
from PIL import Image

from app import app


@pytest.fixture
def client():
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


def _png_bytes(color=(255, 0, 0)):
    buf = BytesIO()
    Image.new('RGB', (32, 32), color).save(buf, format='PNG')
    buf.seek(0)
    return buf


def test_export_png(client):
    resp = client.get('/export/png?text=hello&size=120&gapless=true')

    assert resp.status_code == 200
    assert resp.mimetype == 'image/png'
    image = Image.open(BytesIO(resp.data))
    assert image.size == (120, 120)


def test_export_jpg(client):
    resp = client.get('/export/jpg?text=hello&module_shape=circle&eye_shape=circle')

    assert resp.status_code == 200
    assert resp.data.startswith(b'\xff\xd8')


def test_export_svg(client):
    resp = client.get('/export/svg?text=hello&eye_color=%23ff0000&eye_radius=4')

    assert resp.status_code == 200
    assert resp.mimetype == 'image/svg+xml'
    body = resp.data.decode('utf-8')
    assert body.startswith('<svg id="Layer_1"')
    assert 'stroke:#ff0000' in body


@pytest.mark.parametrize("path", ['/export/png', '/export/jpg', '/export/svg'])
def test_missing_text(client, path):
    resp = client.get(path)

    assert resp.status_code == 400
    assert b"Missing text" in resp.data


@pytest.mark.parametrize("query", [
    'text=hello&version=99',
    'text=hello&eye_shape=triangle',
    'text=hello&module_color=notacolor',
    'text=' + 'a' * 300 + '&version=1&ecc=H',
])
def test_invalid_parameters(client, query):
    resp = client.get('/export/png?' + query)

    assert resp.status_code == 400


def test_png_with_uploaded_logo(client):
    resp = client.post(
        '/export/png',
        data={'text': 'hello', 'size': '200', 'logo': (_png_bytes(), 'logo.png')},
        content_type='multipart/form-data',
    )

    assert resp.status_code == 200
    image = Image.open(BytesIO(resp.data)).convert('RGBA')
    assert image.getpixel((100, 100)) == (255, 0, 0, 255)


def test_svg_with_uploaded_fragment(client):
    fragment = b'<svg width="10" height="10"><rect width="10" height="10"/></svg>'
    resp = client.post(
        '/export/svg',
        data={'text': 'hello', 'svg': (BytesIO(fragment), 'logo.svg')},
        content_type='multipart/form-data',
    )

    assert resp.status_code == 200
    assert b'translate(' in resp.data


def test_svg_with_bad_fragment(client):
    resp = client.post('/export/svg', data={'text': 'hello', 'svg': '<svg></svg>'})

    assert resp.status_code == 400


def test_svg_ignores_uploaded_logo(client):
    resp = client.post(
        '/export/svg',
        data={'text': 'hello', 'logo': (BytesIO(b'not an image'), 'logo.png')},
        content_type='multipart/form-data',
    )

    assert resp.status_code == 200
    assert resp.data.startswith(b'<svg')


def test_png_with_bad_logo(client):
    resp = client.post(
        '/export/png',
        data={'text': 'hello', 'logo': (BytesIO(b'not an image'), 'logo.png')},
        content_type='multipart/form-data',
    )

    assert resp.status_code == 400
