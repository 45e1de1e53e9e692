from flask import request, redirect, render_template, url_for
from flask.views import MethodView
from loguru import logger
from shared.auth import get_token, save_token, TOKEN_MISSING_MESSAGE
from shared.config import DEFAULT_LIMIT, PORTFOLIO_LIMITS
from shared.utils import clean_order_codes, split_skus
from MARKETPLACES.magalu.magalu import MagaluApi, MagaluApiError
from VIEWER.presenters import orders_page, products_page, order_view, product_view, raw_json


def get_int_arg(name: str, default: int = 0) -> int:
    try:
        return max(0, int(request.args.get(name, default)))
    except (TypeError, ValueError):
        return default


def show_raw() -> bool:
    return request.args.get('raw') == '1'


def local_url(url):
    # только ссылки внутри приложения
    if url and url.startswith('/') and not url.startswith('//'):
        return url
    return None


def render_page(template: str, **context):
    context.setdefault('token', get_token())
    context.setdefault('error', None)
    context.setdefault('raw', show_raw())
    context['raw_json'] = raw_json
    return render_template(template, **context)


# --- TOKEN ---
class TokenView(MethodView):

    def post(self):
        save_token(request.form.get('token', ''))
        return redirect(local_url(request.form.get('next')) or url_for('orders_search'))


# --- ORDERS ---
class OrderSearchView(MethodView):

    def get(self):
        raw_codes = request.args.get('codes', '')
        codes = clean_order_codes(raw_codes)
        context = {'active_tab': 'search', 'codes': ', '.join(codes), 'orders': [], 'errors': []}
        if not codes:
            return render_page('orders_search.html', **context)

        token = get_token()
        if not token:
            return render_page('orders_search.html', error=TOKEN_MISSING_MESSAGE, **context)
        try:
            result = MagaluApi(token).get_orders(codes)
        except MagaluApiError as error:
            return render_page('orders_search.html', error=error.message, **context)

        context['orders'] = [{'view': order_view(order), 'data': order} for order in result['orders']]
        context['errors'] = result['errors']
        return render_page('orders_search.html', **context)


class OrderListView(MethodView):

    def get(self):
        offset = get_int_arg('offset')
        query = request.args.get('q', '')
        context = {'active_tab': 'list', 'listing': None}
        if 'offset' not in request.args:  # список загружается только по кнопке "Atualizar Lista"
            return render_page('orders_list.html', **context)

        token = get_token()
        if not token:
            return render_page('orders_list.html', error=TOKEN_MISSING_MESSAGE, **context)
        try:
            listing = MagaluApi(token).get_orders_list(offset, DEFAULT_LIMIT)
        except MagaluApiError as error:
            return render_page('orders_list.html', error=error.message, **context)

        context['listing'] = orders_page(listing, query)
        return render_page('orders_list.html', **context)


class OrderDetailView(MethodView):

    def get(self, code):
        context = {'active_tab': 'list', 'order': None, 'back_offset': get_int_arg('offset')}
        token = get_token()
        if not token:
            return render_page('order_detail.html', error=TOKEN_MISSING_MESSAGE, **context)
        try:
            order = MagaluApi(token).get_order(code)
        except MagaluApiError as error:
            return render_page('order_detail.html', error=error.message, **context)

        context['order'] = {'view': order_view(order), 'data': order}
        return render_page('order_detail.html', **context)


# --- PRODUCTS ---
class ProductListView(MethodView):

    def get(self):
        offset = get_int_arg('offset')
        limit = get_int_arg('limit', DEFAULT_LIMIT)
        if limit not in PORTFOLIO_LIMITS:
            limit = DEFAULT_LIMIT
        context = {'active_tab': 'products', 'portfolio': None, 'data': None, 'limits': PORTFOLIO_LIMITS,
                   'limit': limit}
        if 'offset' not in request.args:
            return render_page('products_list.html', **context)

        token = get_token()
        if not token:
            return render_page('products_list.html', error=TOKEN_MISSING_MESSAGE, **context)
        try:
            portfolio = MagaluApi(token).get_portfolio(offset, limit)
        except MagaluApiError as error:
            return render_page('products_list.html', error=error.message, **context)

        context['portfolio'] = products_page(portfolio, limit, request.args.get('q', ''))
        context['data'] = portfolio
        return render_page('products_list.html', **context)


class ProductSearchView(MethodView):

    def get(self):
        skus = split_skus(request.args.get('sku', ''))
        context = {'active_tab': 'products', 'sku': ', '.join(skus), 'products': [], 'errors': []}
        if not skus:
            return redirect(url_for('products_list'))

        token = get_token()
        if not token:
            return render_page('product_search.html', error=TOKEN_MISSING_MESSAGE, **context)
        try:
            result = MagaluApi(token).get_products_details(skus)
        except MagaluApiError as error:
            return render_page('product_search.html', error=error.message, **context)

        context['products'] = [{'view': product_view(details), 'data': details} for details in result['products']]
        context['errors'] = result['errors']
        return render_page('product_search.html', **context)


class ProductDetailView(MethodView):

    def get(self, sku):
        context = {'active_tab': 'products', 'product': None, 'back_url': local_url(request.args.get('back'))}
        token = get_token()
        if not token:
            return render_page('product_detail.html', error=TOKEN_MISSING_MESSAGE, **context)
        try:
            details = MagaluApi(token).get_product_details(sku)
        except MagaluApiError as error:
            logger.error(f'Ошибка при загрузке товара {sku}: {error.message}')
            return render_page('product_detail.html', error=error.message, **context)

        context['product'] = {'view': product_view(details), 'data': details}
        return render_page('product_detail.html', **context)


def register_pages(app):
    app.add_url_rule('/', 'index', lambda: redirect(url_for('orders_search')))
    app.add_url_rule('/token', view_func=TokenView.as_view('token'))
    app.add_url_rule('/orders/search', view_func=OrderSearchView.as_view('orders_search'))
    app.add_url_rule('/orders', view_func=OrderListView.as_view('orders_list'))
    app.add_url_rule('/orders/<code>', view_func=OrderDetailView.as_view('order_detail'))
    app.add_url_rule('/products', view_func=ProductListView.as_view('products_list'))
    app.add_url_rule('/products/search', view_func=ProductSearchView.as_view('products_search'))
    app.add_url_rule('/products/<path:sku>', view_func=ProductDetailView.as_view('product_detail'))
