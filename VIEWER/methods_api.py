from flask_restful import Resource, reqparse
from loguru import logger
from shared.auth import token_required, save_token, clear_token
from shared.config import DEFAULT_LIMIT
from shared.utils import clean_order_codes, split_skus
from MARKETPLACES.magalu.magalu import MagaluApi, MagaluApiError

page_parser = reqparse.RequestParser()
page_parser.add_argument('offset', type=int, default=0, location='args', help='offset должен быть целым числом')
page_parser.add_argument('limit', type=int, default=DEFAULT_LIMIT, location='args',
                         help='limit должен быть целым числом')

token_parser = reqparse.RequestParser()
token_parser.add_argument('token', type=str, required=True, location='json', help='Токен не задан')


def error_response(error: MagaluApiError):
    logger.error(f'Ошибка API Magalu: {error.message}')
    return {'message': error.message}, error.status_code or 502


def page_args() -> tuple:
    args = page_parser.parse_args()
    return max(0, args['offset']), max(1, args['limit'])


# --- ORDERS ---
class OrdersList(Resource):
    @token_required
    def get(self, token):
        offset, limit = page_args()
        try:
            return MagaluApi(token).get_orders_list(offset, limit)
        except MagaluApiError as error:
            return error_response(error)


class Orders(Resource):
    @token_required
    def get(self, codes, token):  # codes - один или несколько кодов через запятую
        try:
            return MagaluApi(token).get_orders(clean_order_codes(codes))
        except MagaluApiError as error:
            return error_response(error)


# --- PRODUCTS ---
class Portfolio(Resource):
    @token_required
    def get(self, token):
        offset, limit = page_args()
        try:
            return MagaluApi(token).get_portfolio(offset, limit)
        except MagaluApiError as error:
            return error_response(error)


class Products(Resource):
    @token_required
    def get(self, skus, token):  # skus - один или несколько SKU через запятую
        try:
            return MagaluApi(token).get_products_details(split_skus(skus))
        except MagaluApiError as error:
            return error_response(error)


# --- TOKEN ---
class Token(Resource):
    def post(self):
        args = token_parser.parse_args()
        save_token(args['token'])
        return {'message': 'Token salvo'}, 201

    def delete(self):
        clear_token()
        return {'message': 'Token removido'}


def register_resources(api):
    api.add_resource(OrdersList, '/api/orders')
    api.add_resource(Orders, '/api/orders/<string:codes>')
    api.add_resource(Portfolio, '/api/products')
    api.add_resource(Products, '/api/products/<path:skus>')
    api.add_resource(Token, '/api/token', endpoint='api_token')  # 'token' занят HTML-формой
