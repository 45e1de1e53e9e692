import copy
import requests
from urllib.parse import quote
from concurrent.futures import ThreadPoolExecutor
from loguru import logger
from shared.config import DEFAULT_LIMIT, MAX_WORKERS, REQUEST_TIMEOUT
from MARKETPLACES.magalu.config import \
    URL_MAGALU_ORDERS, \
    URL_MAGALU_SKUS, \
    URL_MAGALU_PRICES, \
    URL_MAGALU_STOCKS, \
    STOCK_TYPE_AVAILABLE, \
    EMPTY_RESULTS

TOKEN_REQUIRED_MESSAGE = 'O token de acesso é obrigatório.'
ORDER_CODE_REQUIRED_MESSAGE = 'O código do pedido é obrigatório.'
SKU_REQUIRED_MESSAGE = 'O SKU é obrigatório.'
UNAUTHORIZED_MESSAGE = 'Não autorizado (401). Verifique se seu Token está correto.'
ORDER_NOT_FOUND_MESSAGE = 'Pedido não encontrado (404). Verifique o código.'
PRODUCT_NOT_FOUND_MESSAGE = 'Produto não encontrado (404). Verifique o SKU.'
CONNECTION_ERROR_MESSAGE = 'Falha na conexão com a API Magalu. Verifique sua conexão.'
INVALID_RESPONSE_MESSAGE = 'Resposta inválida da API Magalu (JSON esperado).'


class MagaluApiError(Exception):

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def required(value, message: str) -> str:
    value = (value or '').strip()
    if not value:
        raise MagaluApiError(message)
    return value


def pick_price(price_response: dict):
    # берем первую цену из списка
    results = (price_response or {}).get('results') or []
    return results[0] if results else None


def pick_stock(stock_response: dict):
    # остаток типа AVAILABLE, если его нет - первый из списка
    results = (stock_response or {}).get('results') or []
    if not results:
        return None
    return next((stock for stock in results if stock.get('type') == STOCK_TYPE_AVAILABLE), results[0])


class MagaluApi:

    def __init__(self, token: str):
        self.token = (token or '').strip()

    def get_headers(self) -> dict:
        headers = {
            'Accept': 'application/json',
            'Authorization': f'Bearer {self.token}'
                }
        return headers

    def get(self, url: str, params: dict = None, not_found_message: str = None):
        required(self.token, TOKEN_REQUIRED_MESSAGE)
        try:
            response = requests.get(url=url, headers=self.get_headers(), params=params, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as error:
            logger.error(f'Ошибка соединения {error} URL:{url}')
            raise MagaluApiError(CONNECTION_ERROR_MESSAGE) from error

        if not response.ok:
            logger.error(f'Ошибка в выполнении запроса Статус код:{response.status_code} URL:{url}')
            if response.status_code == 401:
                raise MagaluApiError(UNAUTHORIZED_MESSAGE, 401)
            if response.status_code == 404 and not_found_message:
                raise MagaluApiError(not_found_message, 404)
            raise MagaluApiError(f'Erro na API: {response.status_code} {response.reason}', response.status_code)

        logger.info(f'Запрос выполнен успешно Статус код:{response.status_code} URL:{url}')
        try:
            return response.json()
        except ValueError as error:
            logger.error(f'Ответ не в формате JSON URL:{url}')
            raise MagaluApiError(INVALID_RESPONSE_MESSAGE, response.status_code) from error

    # --- ФУНКЦИИ ORDERS ---
    def get_order(self, order_code: str) -> dict:  # GET /orders/{code}
        order_code = required(order_code, ORDER_CODE_REQUIRED_MESSAGE)
        url = f'{URL_MAGALU_ORDERS}/{quote(order_code, safe="")}'
        return self.get(url, not_found_message=ORDER_NOT_FOUND_MESSAGE)

    def get_orders_list(self, offset: int = 0, limit: int = DEFAULT_LIMIT) -> dict:  # GET /orders
        params = {
            '_offset': offset,  # сколько записей пропустить
            'limit': limit  # в API заказов параметр без подчеркивания
        }
        return self.get(URL_MAGALU_ORDERS, params)

    def get_orders(self, order_codes: list) -> dict:  # несколько заказов параллельно
        required(self.token, TOKEN_REQUIRED_MESSAGE)
        order_codes = list(dict.fromkeys(code.strip() for code in order_codes if code and code.strip()))
        orders, errors = [], []
        if not order_codes:
            return {'orders': orders, 'errors': errors}

        with ThreadPoolExecutor(max_workers=MAX_WORKERS) as executor:
            futures = [(code, executor.submit(self.get_order, code)) for code in order_codes]
            for code, future in futures:
                try:
                    orders.append(future.result())
                except MagaluApiError as error:
                    errors.append({'code': code, 'message': error.message})

        logger.info(f'Заказы получены: {len(orders)}, ошибки: {len(errors)}')
        return {'orders': orders, 'errors': errors}

    # --- ФУНКЦИИ PRODUCTS (PORTFOLIO) ---
    def get_portfolio(self, offset: int = 0, limit: int = DEFAULT_LIMIT) -> dict:  # GET /portfolios/skus
        params = {
            '_offset': offset,
            '_limit': limit  # в API товаров параметр с подчеркиванием
        }
        return self.get(URL_MAGALU_SKUS, params)

    def get_product(self, sku: str) -> dict:  # GET /portfolios/skus/{sku}
        sku = required(sku, SKU_REQUIRED_MESSAGE)
        url = f'{URL_MAGALU_SKUS}/{quote(sku, safe="")}'
        return self.get(url, not_found_message=PRODUCT_NOT_FOUND_MESSAGE)

    def get_side_data(self, base_url: str, sku: str) -> dict:
        # цены и остатки не должны блокировать показ товара
        sku = required(sku, SKU_REQUIRED_MESSAGE)
        required(self.token, TOKEN_REQUIRED_MESSAGE)
        try:
            return self.get(f'{base_url}/{quote(sku, safe="")}')
        except MagaluApiError as error:
            if error.status_code != 404:
                logger.error(f'Не удалось получить данные по SKU {sku}: {error.message}')
            return copy.deepcopy(EMPTY_RESULTS)

    def get_product_price(self, sku: str) -> dict:  # GET /portfolios/prices/{sku}
        return self.get_side_data(URL_MAGALU_PRICES, sku)

    def get_product_stock(self, sku: str) -> dict:  # GET /portfolios/stocks/{sku}
        return self.get_side_data(URL_MAGALU_STOCKS, sku)

    def get_product_details(self, sku: str) -> dict:  # товар + цена + остаток параллельно
        sku = required(sku, SKU_REQUIRED_MESSAGE)
        required(self.token, TOKEN_REQUIRED_MESSAGE)
        with ThreadPoolExecutor(max_workers=3) as executor:
            product_future = executor.submit(self.get_product, sku)
            price_future = executor.submit(self.get_product_price, sku)
            stock_future = executor.submit(self.get_product_stock, sku)
            product = product_future.result()
            price_response = price_future.result()
            stock_response = stock_future.result()
        return {
            'sku': sku,
            'product': product,
            'price': pick_price(price_response),
            'stock': pick_stock(stock_response)
        }

    def get_products_details(self, skus: list) -> dict:  # несколько SKU параллельно
        required(self.token, TOKEN_REQUIRED_MESSAGE)
        skus = list(dict.fromkeys(sku.strip() for sku in skus if sku and sku.strip()))
        products, errors = [], []
        if not skus:
            return {'products': products, 'errors': errors}

        with ThreadPoolExecutor(max_workers=MAX_WORKERS) as executor:
            futures = [(sku, executor.submit(self.get_product_details, sku)) for sku in skus]
            for sku, future in futures:
                try:
                    products.append(future.result())
                except MagaluApiError as error:
                    errors.append({'sku': sku, 'message': error.message})

        logger.info(f'Товары получены: {len(products)}, ошибки: {len(errors)}')
        return {'products': products, 'errors': errors}
