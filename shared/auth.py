import os
from functools import wraps
from dotenv import get_key, set_key, unset_key
from loguru import logger
from shared import config

TOKEN_MISSING_MESSAGE = 'Por favor, insira o Token Magalu no topo da página.'


def get_token() -> str:
    # переменная окружения имеет приоритет над сохраненным токеном
    token = os.environ.get(config.TOKEN_KEY)
    if token:
        return token.strip()
    if not os.path.exists(config.TOKEN_FILE):
        return ''
    return (get_key(config.TOKEN_FILE, config.TOKEN_KEY) or '').strip()


def save_token(token: str):
    token = (token or '').strip()
    if not token:
        clear_token()
        return
    if not os.path.exists(config.TOKEN_FILE):
        open(config.TOKEN_FILE, 'a').close()
    set_key(config.TOKEN_FILE, config.TOKEN_KEY, token, quote_mode='never')
    logger.info(f'Токен сохранен в {config.TOKEN_FILE}')


def clear_token():
    if os.path.exists(config.TOKEN_FILE) and get_key(config.TOKEN_FILE, config.TOKEN_KEY) is not None:
        unset_key(config.TOKEN_FILE, config.TOKEN_KEY)
        logger.info(f'Токен удален из {config.TOKEN_FILE}')


def token_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        token = get_token()
        if not token:
            return {'message': TOKEN_MISSING_MESSAGE}, 401
        kwargs['token'] = token  # --- проброс токена в метод ---
        return f(*args, **kwargs)
    return decorated
