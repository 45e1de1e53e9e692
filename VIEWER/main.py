import os
from flask import Flask
from flask_restful import Api
from loguru import logger
from shared.config import LOG_FILE, SECRET_KEY, DEBUG, HOST, PORT
from VIEWER.pages import register_pages
from VIEWER.methods_api import register_resources

logger.remove()
os.makedirs(os.path.dirname(LOG_FILE) or '.', exist_ok=True)
logger.add(sink=LOG_FILE, format="{time} {level} {message}", level="INFO")

app = Flask(__name__)
app.config['SECRET_KEY'] = SECRET_KEY
app.config['RESTFUL_JSON'] = {'ensure_ascii': False}  # португальские сообщения без \u-экранирования
api = Api(app)

# --- HTML ROUTES ---
register_pages(app)

# --- JSON ROUTES ---
register_resources(api)

if __name__ == '__main__':
    logger.info(f'Magalu API Viewer запущен на {HOST}:{PORT}')
    app.run(host=HOST, port=PORT, debug=DEBUG)
