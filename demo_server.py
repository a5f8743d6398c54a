# -*- coding: utf-8 -*-
"""
Demo server for the autocatalog extension.

- ``/``               page translated from ``template/locales``
- ``/1``              same page with catalogs from ``template_1/locales``
- ``/dumpAllStrings`` joint catalog of the active locale as JSON
- ``/locale``         detected locale and supported locales

Run ``python demo_server.py --port 3000`` then try ``/?lang=ru``.
"""

import argparse
import logging
import os
import sys

from flask import Flask, jsonify, render_template_string

from autocatalog import I18n, current_i18n


if getattr(sys, 'frozen', False):
    BASE_DIR = os.path.dirname(sys.executable)
else:
    BASE_DIR = os.path.dirname(os.path.abspath(__file__))

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'

logger = logging.getLogger(__name__)

PAGE_TEMPLATE = """<!doctype html>
<html lang="{{ get_locale() }}">
<head><title>{{ __('Demo page') }}</title></head>
<body>
  <h1>{{ __('Hello, %s!', [name]) }}</h1>
  <p>{{ __('This page is available in several languages.') }}</p>
  <ul>
  {% for code in get_locales() %}
    <li><a href="?lang={{ code }}">{{ code }}</a></li>
  {% endfor %}
  </ul>
</body>
</html>
"""

i18n = I18n()


def setup_logging(log_dir=None, level=logging.INFO):
    handlers = [logging.StreamHandler()]
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(os.path.join(log_dir, 'server.log'), encoding='utf-8'))
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)


def create_app(config=None):
    app = Flask(__name__, root_path=BASE_DIR)
    app.config.update(
        SECRET_KEY=os.environ.get('DEMO_SECRET_KEY', 'autocatalog-demo'),
        I18N_LOCALES=('en', 'ru'),
        I18N_DEFAULT_LOCALE='en',
        I18N_BASE_DIR='template',
        I18N_JOINT_DIR='locales',
    )
    if config:
        app.config.update(config)
    i18n.init_app(app)

    @app.route('/')
    def index():
        return render_template_string(PAGE_TEMPLATE, name='World')

    @app.route('/1')
    def alternate():
        current_i18n.set_base_dir(app.config.get('DEMO_ALT_BASE_DIR', 'template_1'))
        return render_template_string(PAGE_TEMPLATE, name='World')

    @app.route('/dumpAllStrings')
    def dump_all_strings():
        return jsonify(current_i18n.dump_all_strings())

    @app.route('/locale')
    def locale_info():
        return jsonify({
            'locale': current_i18n.get_locale(),
            'locales': current_i18n.get_locales(),
            'default_locale': current_i18n.get_default_locale(),
        })

    return app


def main(argv=None):
    parser = argparse.ArgumentParser(description='autocatalog demo server')
    parser.add_argument('--host', default='127.0.0.1')
    parser.add_argument('--port', type=int, default=3000)
    parser.add_argument('--debug', action='store_true')
    args = parser.parse_args(argv)

    setup_logging(BASE_DIR, logging.DEBUG if args.debug else logging.INFO)
    app = create_app()
    logger.info(f"Demo server listening on http://{args.host}:{args.port}")
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == '__main__':
    main()
