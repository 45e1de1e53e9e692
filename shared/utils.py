import re
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from zoneinfo import ZoneInfo
from shared.config import DISPLAY_TIMEZONE

NBSP = '\xa0'
UNKNOWN_CUSTOMER = 'Cliente não identificado'

# правила классификации статусов: (подстроки, label, color, icon), порядок проверки важен
STATUS_RULES = [
    # --- товары ---
    (('unpublished', 'disabled'), 'INATIVO / NÃO PUBLICADO', 'gray', 'eye-off'),
    (('published', 'active'), 'PUBLICADO', 'green', 'globe'),
    # --- заказы ---
    (('cancel', ), 'CANCELADO', 'red', 'x-circle'),
    (('deliver', 'entregue', 'finished'), 'CONCLUÍDO', 'emerald', 'check-check'),
    (('approv', 'paid', 'pago'), 'APROVADO', 'green', 'check-circle'),
    (('ship', 'transport', 'enviado'), 'TRANSPORTE', 'blue', 'truck'),
    (('invoic', 'faturado', 'process'), 'PROCESSANDO', 'amber', 'package-check'),
    (('new', 'novo', 'created'), 'NOVO', 'sky', 'sparkles'),
]


def format_value(value, normalizer=100) -> str:
    """Сумма в минимальных единицах -> строка в формате pt-BR, например 'R$ 1.234,56'."""
    if value is None:
        return f'R${NBSP}0,00'
    real_value = (Decimal(str(value)) / Decimal(str(normalizer or 100))).quantize(Decimal('0.01'), ROUND_HALF_UP)
    # 1,234.56 -> 1.234,56
    formatted = f'{abs(real_value):,.2f}'.translate(str.maketrans({',': '.', '.': ','}))
    sign = '-' if real_value < 0 else ''
    return f'{sign}R${NBSP}{formatted}'


def format_date(date_string) -> str:
    if not date_string:
        return '-'
    try:
        value = datetime.fromisoformat(str(date_string).replace('Z', '+00:00'))
    except ValueError:
        return str(date_string)
    if value.tzinfo:
        value = value.astimezone(ZoneInfo(DISPLAY_TIMEZONE))
    return value.strftime('%d/%m/%Y %H:%M')


def get_status_config(status_raw) -> dict:
    status = (status_raw or '').lower()
    for needles, label, color, icon in STATUS_RULES:
        if any(needle in status for needle in needles):
            return {'label': label, 'color': color, 'icon': icon}
    return {'label': (status_raw or 'UNKNOWN').upper(), 'color': 'gray', 'icon': 'clock'}


def get_customer_info(order: dict) -> dict:
    customer = order.get('customer') or {}
    if customer.get('name'):
        return {
            'name': customer['name'],
            'document_number': customer.get('document_number'),
            'email': customer.get('email'),
            'phone_number': customer.get('phone_number')
        }

    # покупателя нет - берем получателя первой доставки
    deliveries = order.get('deliveries') or [{}]
    recipient = ((deliveries[0] or {}).get('shipping') or {}).get('recipient') or {}
    return {
        'name': recipient.get('name') or UNKNOWN_CUSTOMER,
        'document_number': recipient.get('document_number') or '-',
        'email': None,
        'phone_number': None
    }


def clean_order_codes(raw: str) -> list:
    # 'LU-1502870666843360-1, 2134567890123456' -> ['1502870666843360', '2134567890123456']
    codes = []
    for code in (raw or '').split(','):
        code = code.strip()
        # сначала префикс, иначе 'LU-123' превратится в 'LU'
        code = re.sub(r'^LU-', '', code, flags=re.IGNORECASE)
        code = re.sub(r'-\d+$', '', code)  # суффикс доставки
        if code:
            codes.append(code)
    return codes


def split_skus(raw: str) -> list:
    return [sku.strip() for sku in (raw or '').split(',') if sku.strip()]
