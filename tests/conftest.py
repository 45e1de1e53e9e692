import os
import tempfile

# настройки должны быть заданы до импорта shared.config
_tmp_dir = tempfile.mkdtemp(prefix='magalu-viewer-tests-')
os.environ['LOG_FILE'] = os.path.join(_tmp_dir, 'logs', 'viewer_logfile.log')
os.environ['TOKEN_FILE'] = os.path.join(_tmp_dir, 'token')
os.environ['DISPLAY_TIMEZONE'] = 'America/Sao_Paulo'
os.environ.pop('MAGALU_API_TOKEN', None)
os.environ.pop('APP_ENV', None)
os.environ.pop('SECRET_KEY', None)

import pytest

from shared import config
import MARKETPLACES.magalu.magalu as magalu
from MARKETPLACES.magalu.config import URL_MAGALU_ORDERS, URL_MAGALU_SKUS, URL_MAGALU_PRICES, URL_MAGALU_STOCKS


class FakeResponse:
    def __init__(self, status_code=200, payload=None, reason='OK'):
        self.status_code = status_code
        self.payload = payload
        self.reason = reason

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeRequestsGet:
    """Routes `requests.get` calls by full URL; unknown URLs answer 404."""

    def __init__(self, routes):
        self.routes = routes
        self.calls = []

    def __call__(self, url, headers=None, params=None, timeout=None):
        self.calls.append({'url': url, 'headers': headers, 'params': params, 'timeout': timeout})
        route = self.routes.get(url)
        if route is None:
            return FakeResponse(404, {'message': 'not found'}, 'Not Found')
        if isinstance(route, Exception):
            raise route
        return route

    def urls(self):
        return [call['url'] for call in self.calls]


@pytest.fixture(autouse=True)
def token_file(tmp_path, monkeypatch):
    path = tmp_path / 'token'
    monkeypatch.setattr(config, 'TOKEN_FILE', str(path))
    monkeypatch.delenv('MAGALU_API_TOKEN', raising=False)
    return path


@pytest.fixture
def fake_get(monkeypatch):
    def install(routes):
        fake = FakeRequestsGet(routes)
        monkeypatch.setattr(magalu.requests, 'get', fake)
        return fake
    return install


@pytest.fixture
def sample_order():
    return {
        'id': 'a1b2c3',
        'code': '1502870666843360',
        'status': 'approved',
        'created_at': '2024-05-10T13:45:00Z',
        'approved_at': '2024-05-10T14:00:00Z',
        'updated_at': '2024-05-11T09:00:00Z',
        'channel': {'extras': {'alias': 'Magalu Marketplace'}},
        'customer': {
            'name': 'Maria Souza',
            'document_number': '123.456.789-00',
            'customer_type': 'PF',
            'email': 'maria@example.com',
        },
        'payments': [
            {'description': 'Cartão de crédito', 'installments': 3, 'method': 'credit_card',
             'amount': 15990, 'normalizer': 100, 'currency': 'BRL'},
        ],
        'amounts': {
            'currency': 'BRL', 'normalizer': 100, 'total': 15990,
            'discount': {'currency': 'BRL', 'normalizer': 100, 'total': 1000},
            'freight': {'currency': 'BRL', 'normalizer': 100, 'total': 1990},
            'tax': {'currency': 'BRL', 'normalizer': 100, 'total': 0},
        },
        'deliveries': [
            {
                'code': '1502870666843360-1',
                'id': 'd1',
                'status': 'shipped',
                'amounts': {
                    'currency': 'BRL', 'normalizer': 100, 'total': 15990,
                    'discount': {'currency': 'BRL', 'normalizer': 100, 'total': 1000},
                    'freight': {'currency': 'BRL', 'normalizer': 100, 'total': 1990},
                    'tax': {'currency': 'BRL', 'normalizer': 100, 'total': 0},
                },
                'shipping': {
                    'recipient': {
                        'name': 'Maria Souza',
                        'document_number': '123.456.789-00',
                        'address': {
                            'street': 'Rua das Flores', 'number': '100', 'district': 'Centro',
                            'city': 'Franca', 'state': 'SP', 'zipcode': '14400-000', 'country': 'BR',
                        },
                    },
                    'provider': {'name': 'Magalu Entregas', 'description': 'Entrega padrão'},
                    'deadline': {'value': 5, 'precision': 'days', 'limit_date': '2024-05-15T23:59:00Z'},
                },
                'items': [
                    {
                        'sequencial': 1,
                        'quantity': 2,
                        'measure_unit': 'unit',
                        'unit_price': {'currency': 'BRL', 'normalizer': 100, 'total': 7000, 'value': 7000},
                        'amounts': {'currency': 'BRL', 'normalizer': 100, 'total': 14000},
                        'info': {'sku': 'SKU-001', 'name': 'Liquidificador', 'brand': 'Britânia',
                                 'images': [{'url': 'https://img.example.com/sku-001.jpg'}]},
                    },
                ],
            },
        ],
    }


@pytest.fixture
def sample_product():
    return {
        'sku': 'SKU-001',
        'title': 'Liquidificador 3 Velocidades',
        'description': '<p>Potente</p>',
        'status': 'published',
        'condition': 'new',
        'brand': 'Britânia',
        'active': True,
        'images': [{'type': 'main', 'reference': 'https://img.example.com/a.jpg'},
                   {'type': 'extra', 'reference': 'https://img.example.com/b.jpg'}],
        'dimensions': [{'name': 'product',
                        'height': {'value': 40, 'unit': 'cm'}, 'width': {'value': 20, 'unit': 'cm'},
                        'length': {'value': 20, 'unit': 'cm'}, 'weight': {'value': 2, 'unit': 'kg'}}],
        'url_marketplace': [{'channel': 'netshoes', 'url': 'https://netshoes.example.com/sku-001'},
                            {'channel': 'magazineluiza', 'url': 'https://magazineluiza.example.com/sku-001'}],
        'identifiers': [{'type': 'SKU_EXTERNO', 'value': 'X1'}, {'type': 'EAN', 'value': '7891234567890'}],
        'attributes': [{'name': 'Cor', 'value': 'Preto'}],
        'created_at': '2024-01-02T10:00:00Z',
        'updated_at': '2024-03-04T10:00:00Z',
    }


@pytest.fixture
def price_response():
    return {
        'results': [
            {'list_price': 19990, 'price': 15990, 'currency': 'BRL', 'normalizer': 100,
             'channel': {'id': 'magalu'}, 'created_at': '2024-01-02T10:00:00Z', 'updated_at': '2024-04-01T12:00:00Z'},
            {'list_price': 20990, 'price': 16990, 'currency': 'BRL', 'normalizer': 100,
             'channel': {'id': 'other'}, 'created_at': '2024-01-02T10:00:00Z', 'updated_at': '2024-04-01T12:00:00Z'},
        ],
        'meta': {'page': {'count': 2, 'limit': 20, 'offset': 0, 'max_limit': 100}, 'links': {'self': ''}},
    }


@pytest.fixture
def stock_response():
    return {
        'results': [
            {'type': 'RESERVED', 'quantity': 3, 'channel': {'id': 'magalu'}},
            {'type': 'AVAILABLE', 'quantity': 12, 'channel': {'id': 'magalu'}},
        ],
        'meta': {'page': {'count': 2, 'limit': 20, 'offset': 0, 'max_limit': 100}, 'links': {'self': ''}},
    }


@pytest.fixture
def product_routes(sample_product, price_response, stock_response):
    return {
        f'{URL_MAGALU_SKUS}/SKU-001': FakeResponse(200, sample_product),
        f'{URL_MAGALU_PRICES}/SKU-001': FakeResponse(200, price_response),
        f'{URL_MAGALU_STOCKS}/SKU-001': FakeResponse(200, stock_response),
    }


@pytest.fixture
def order_routes(sample_order):
    return {f'{URL_MAGALU_ORDERS}/1502870666843360': FakeResponse(200, sample_order)}
