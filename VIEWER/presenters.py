import json
from shared.utils import format_value, format_date, get_status_config, get_customer_info
from MARKETPLACES.magalu.config import MARKETPLACE_CHANNEL


def get_page_meta(response: dict) -> tuple:
    meta = response.get('meta') or {}
    return meta.get('page') or {}, meta.get('links') or {}


def get_marketplace_url(product: dict):
    urls = product.get('url_marketplace') or []
    return next((item.get('url') for item in urls if item.get('channel') == MARKETPLACE_CHANNEL), None)


def get_main_image(product: dict):
    images = product.get('images') or []
    return images[0].get('reference') if images else None


def orders_page(listing: dict, query: str = '') -> dict:
    # фильтр применяется только к текущей странице
    page, _ = get_page_meta(listing)
    offset = page.get('offset') or 0
    limit = page.get('limit') or 0
    count = page.get('count') or 0
    query = (query or '').strip()

    rows = []
    for order in listing.get('results') or []:
        customer = get_customer_info(order)
        code = str(order.get('code') or '')
        if query and query not in code and query.lower() not in customer['name'].lower():
            continue
        amounts = order.get('amounts') or {}
        rows.append({
            'id': order.get('id'),
            'code': code,
            'created_at': format_date(order.get('created_at')),
            'customer': customer['name'],
            'status': get_status_config(order.get('status')),
            'total': format_value(amounts.get('total'), amounts.get('normalizer')),
        })

    return {
        'rows': rows,
        'query': query,
        'offset': offset,
        'limit': limit,
        'count': count,
        'first': offset + 1,
        'last': min(offset + limit, count),
        'has_prev': offset > 0,
        'has_next': offset + limit < count,
        'prev_offset': max(0, offset - limit),
        'next_offset': offset + limit,
    }


def products_page(portfolio: dict, limit: int, query: str = '') -> dict:
    # навигация по ссылкам next/previous, а не по count
    page, links = get_page_meta(portfolio)
    offset = page.get('offset') or 0
    products = portfolio.get('results') or []
    needle = (query or '').strip().lower()

    rows = []
    for product in products:
        sku = str(product.get('sku') or '')
        title = product.get('title') or ''
        if needle and needle not in sku.lower() and needle not in title.lower():
            continue
        rows.append({
            'sku': sku,
            'title': title,
            'brand': product.get('brand'),
            'condition': product.get('condition'),
            'image': get_main_image(product),
            'status': get_status_config(product.get('status')),
            'created_at': format_date(product.get('created_at')),
            'marketplace_url': get_marketplace_url(product),
        })

    return {
        'rows': rows,
        'query': (query or '').strip(),
        'offset': offset,
        'limit': limit,
        'page': offset // limit + 1 if limit else 1,
        'first': offset + 1,
        'last': offset + len(products),
        'has_prev': bool(links.get('previous')) or offset > 0,
        'has_next': bool(links.get('next')),
        'prev_offset': max(0, offset - limit),
        'next_offset': offset + limit,
    }


def payment_view(payment: dict) -> dict:
    installments = payment.get('installments') or 1
    normalizer = payment.get('normalizer')
    amount = payment.get('amount') or 0
    return {
        'description': payment.get('description'),
        'method': payment.get('method'),
        'installments': installments,
        'installment_value': format_value(amount / installments, normalizer),
        'amount': format_value(amount, normalizer),
    }


def item_view(item: dict) -> dict:
    info = item.get('info') or {}
    unit_price = item.get('unit_price') or {}
    amounts = item.get('amounts') or {}
    images = info.get('images') or []
    return {
        'sku': info.get('sku'),
        'name': info.get('name'),
        'brand': info.get('brand'),
        'image': images[0].get('url') if images else None,
        'quantity': item.get('quantity'),
        'measure_unit': item.get('measure_unit'),
        'unit_price': format_value(unit_price.get('value', unit_price.get('total')), unit_price.get('normalizer')),
        'total': format_value(amounts.get('total'), amounts.get('normalizer')),
    }


def delivery_view(delivery: dict, index: int) -> dict:
    amounts = delivery.get('amounts') or {}
    freight = amounts.get('freight') or {}
    return {
        'number': index + 1,
        'code': delivery.get('code'),
        'status': get_status_config(delivery.get('status')),
        'lines': [item_view(item) for item in delivery.get('items') or []],
        'freight': format_value(freight.get('total'), freight.get('normalizer')),
        'total': format_value(amounts.get('total'), amounts.get('normalizer')),
    }


def totals_view(amounts: dict) -> dict:
    total = amounts.get('total') or 0
    normalizer = amounts.get('normalizer')
    freight = amounts.get('freight') or {}
    discount = amounts.get('discount') or {}
    freight_total = freight.get('total') or 0
    discount_total = discount.get('total') or 0
    return {
        'subtotal': format_value(total - freight_total + discount_total, normalizer),
        'freight': format_value(freight_total, freight.get('normalizer')),
        'discount': format_value(discount_total, discount.get('normalizer')) if discount_total > 0 else None,
        'total': format_value(total, normalizer),
    }


def order_view(order: dict) -> dict:
    deliveries = order.get('deliveries') or []
    shipping = (deliveries[0].get('shipping') or {}) if deliveries else {}
    recipient = shipping.get('recipient') or {}
    deadline = shipping.get('deadline')
    channel = order.get('channel') or {}
    return {
        'code': order.get('code'),
        'channel': (channel.get('extras') or {}).get('alias') or 'Canal Magalu',
        'status': get_status_config(order.get('status')),
        'created_at': format_date(order.get('created_at')),
        'approved_at': format_date(order.get('approved_at')) if order.get('approved_at') else None,
        'customer': get_customer_info(order),
        'address': recipient.get('address'),
        'provider': shipping.get('provider'),
        'deadline': format_date(deadline.get('limit_date')) if deadline else None,
        'payments': [payment_view(payment) for payment in order.get('payments') or []],
        'deliveries': [delivery_view(delivery, index) for index, delivery in enumerate(deliveries)],
        'totals': totals_view(order.get('amounts') or {}),
    }


def product_view(details: dict) -> dict:
    # details - словарь {'sku':..., 'product':..., 'price':..., 'stock':...}
    product = details.get('product') or {}
    price = details.get('price')
    stock = details.get('stock')
    identifiers = product.get('identifiers') or []
    dimensions = product.get('dimensions') or []
    return {
        'sku': product.get('sku') or details.get('sku'),
        'title': product.get('title'),
        'brand': product.get('brand'),
        'condition': product.get('condition'),
        'description': product.get('description'),
        'status': get_status_config(product.get('status')),
        'ean': next((item.get('value') for item in identifiers if item.get('type') in ('EAN', 'GTIN')), None),
        'identifiers': identifiers,
        'attributes': product.get('attributes') or [],
        'dimensions': dimensions[0] if dimensions else None,
        'images': [image.get('reference') for image in product.get('images') or [] if image.get('reference')],
        'marketplace_url': get_marketplace_url(product),
        'created_at': format_date(product.get('created_at')),
        'updated_at': format_date(product.get('updated_at')),
        'price': {
            'list_price': format_value(price.get('list_price'), price.get('normalizer')),
            'price': format_value(price.get('price'), price.get('normalizer')),
            'updated_at': format_date(price.get('updated_at')),
        } if price else None,
        'stock': {
            'type': stock.get('type'),
            'quantity': stock.get('quantity'),
        } if stock else None,
    }


def raw_json(data) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)
