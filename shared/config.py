import os
from os.path import join, dirname, exists, expanduser
from dotenv import load_dotenv

dotenv_path = join(dirname(__file__), '.env')

# если файл .env существует подгрузить переменные окружения из него
if exists(dotenv_path):
    load_dotenv(dotenv_path)

APP_ENV = os.environ.get('APP_ENV')

# --------------------------------------------------------------------------------
#                        GENERAL SETTINGS
# --------------------------------------------------------------------------------

DEFAULT_LIMIT = 20  # кол-во записей на странице (заказы и товары)
PORTFOLIO_LIMITS = [10, 20, 50, 100]  # допустимые размеры страницы для списка товаров
MAX_WORKERS = int(os.environ.get('MAX_WORKERS', 8))  # число потоков для параллельных запросов в API

# файл, в котором хранится токен Magalu (формат .env)
TOKEN_FILE = os.environ.get('TOKEN_FILE', expanduser('~/.magalu_viewer'))
TOKEN_KEY = 'MAGALU_API_TOKEN'

DISPLAY_TIMEZONE = os.environ.get('DISPLAY_TIMEZONE', 'America/Sao_Paulo')
LOG_FILE = os.environ.get('LOG_FILE', 'logs/viewer_logfile.log')
SECRET_KEY = os.environ.get('SECRET_KEY')

# --------------------------------------------------------------------------------
#                        DEVELOPMENT SETTINGS
# --------------------------------------------------------------------------------

if APP_ENV == 'development':

    REQUEST_TIMEOUT = 30  # таймаут запроса в API Magalu (сек)
    DEBUG = True
    HOST = '127.0.0.1'
    PORT = 5000

# --------------------------------------------------------------------------------
#                            PRODUCTION SETTINGS
# --------------------------------------------------------------------------------

else:

    REQUEST_TIMEOUT = 10  # таймаут запроса в API Magalu (сек)
    DEBUG = False
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', 5000))
