import json
import os
import sys

import pytest

# Add project root to sys.path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@pytest.fixture(autouse=True)
def _clean_locale_env(monkeypatch):
    # the environment strategy must not pick up the developer's shell locale
    monkeypatch.delenv('LANG', raising=False)


@pytest.fixture
def site_dir(tmp_path):
    return tmp_path / 'site'


@pytest.fixture
def joint_dir(tmp_path):
    return tmp_path / 'joint'


@pytest.fixture
def write_json():
    def _write(path, data):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, ensure_ascii=False), encoding='utf-8')
        return path

    return _write


@pytest.fixture
def read_json():
    def _read(path):
        return json.loads(path.read_text(encoding='utf-8'))

    return _read


@pytest.fixture
def make_options(site_dir, joint_dir):
    from autocatalog.config import I18nOptions

    def _make(**overrides):
        values = {
            'locales': ('en', 'ru'),
            'default_locale': 'en',
            'base_dir': str(site_dir),
            'joint_dir': str(joint_dir),
        }
        values.update(overrides)
        return I18nOptions.from_mapping(None, **values)

    return _make


@pytest.fixture
def make_engine(make_options):
    from autocatalog.engine import I18nEngine

    def _make(writer=None, **overrides):
        return I18nEngine(make_options(**overrides), writer=writer)

    return _make


@pytest.fixture
def make_app(site_dir, joint_dir):
    from flask import Flask, jsonify, render_template_string, session

    from autocatalog import I18n, current_i18n

    def _make(**config):
        flask_app = Flask(__name__)
        flask_app.config.update({
            'TESTING': True,
            'SECRET_KEY': 'test-secret',
            'I18N_LOCALES': ('en', 'ru'),
            'I18N_DEFAULT_LOCALE': 'en',
            'I18N_BASE_DIR': str(site_dir),
            'I18N_JOINT_DIR': str(joint_dir),
        })
        flask_app.config.update(config)
        I18n(flask_app)

        @flask_app.route('/locale')
        def locale():
            return jsonify({'locale': current_i18n.get_locale()})

        @flask_app.route('/t/<key>')
        def translate_key(key):
            return jsonify({'text': current_i18n.translate(key)})

        @flask_app.route('/remember/<code>')
        def remember(code):
            session['lang'] = code
            return jsonify({'ok': True})

        @flask_app.route('/page')
        def page():
            return render_template_string("{{ get_locale() }}|{{ __('greeting') }}|{{ get_default_locale() }}")

        return flask_app

    return _make


@pytest.fixture
def app(make_app):
    return make_app()


@pytest.fixture
def client(app):
    return app.test_client()
