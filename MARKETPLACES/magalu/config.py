BASE_URL = 'https://api.magalu.com/seller/v1'

URL_MAGALU_ORDERS = BASE_URL + '/orders'  # GET /orders?_offset=&limit=, GET /orders/{code}
URL_MAGALU_SKUS = BASE_URL + '/portfolios/skus'  # GET /portfolios/skus?_offset=&_limit=, GET /portfolios/skus/{sku}
URL_MAGALU_PRICES = BASE_URL + '/portfolios/prices'  # GET /portfolios/prices/{sku}
URL_MAGALU_STOCKS = BASE_URL + '/portfolios/stocks'  # GET /portfolios/stocks/{sku}

STOCK_TYPE_AVAILABLE = 'AVAILABLE'  # тип остатка, доступного к продаже
MARKETPLACE_CHANNEL = 'magazineluiza'  # канал в url_marketplace со ссылкой на витрину

# пустой ответ для цен и остатков (если запрос завершился ошибкой)
EMPTY_RESULTS = {
    'results': [],
    'meta': {
        'page': {'count': 0, 'limit': 0, 'offset': 0, 'max_limit': 0},
        'links': {'self': ''}
    }
}

# Пример ответа GET /orders (суммы в минимальных единицах, делитель normalizer)
# {
#     "meta": {
#         "page": {"limit": 20, "offset": 0, "count": 153, "max_limit": 100},
#         "links": {"self": "...", "next": "..."}
#     },
#     "results": [
#         {
#             "id": "0b2f...", "code": "1502870666843360", "status": "approved",
#             "created_at": "2024-05-10T13:45:00Z",
#             "amounts": {"currency": "BRL", "normalizer": 100, "total": 15990,
#                         "discount": {"total": 0}, "freight": {"total": 1990}},
#             "deliveries": [{"status": "shipped", "shipping": {"recipient": {...}}, "items": [...]}]
#         }
#     ]
# }

# Пример ответа GET /portfolios/stocks/{sku}
# {
#     "results": [
#         {"type": "AVAILABLE", "quantity": 12, "channel": {"id": "..."},
#          "created_at": "...", "updated_at": "..."}
#     ],
#     "meta": {...}
# }
