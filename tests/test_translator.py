# -*- coding: utf-8 -*-

import pytest

from autocatalog.translator import format_message
from autocatalog.writer import NullCatalogWriter


def test_unit_catalog_value_is_returned(make_engine, site_dir, write_json):
    write_json(site_dir / 'locales' / 'en.json', {'greeting': 'Hello'})
    i18n = make_engine().begin()

    assert i18n.get_locale() == 'en'
    assert i18n.translate('greeting') == 'Hello'


def test_known_key_with_empty_placeholder_returns_empty(make_engine, site_dir, write_json, joint_dir):
    write_json(site_dir / 'locales' / 'en.json', {'greeting': ''})
    write_json(joint_dir / 'en.json', {'greeting': 'From joint'})
    i18n = make_engine().begin()

    assert i18n.translate('greeting') == ''


def test_unit_catalog_takes_precedence_over_joint(make_engine, site_dir, joint_dir, write_json):
    write_json(site_dir / 'locales' / 'en.json', {'title': 'Unit title'})
    write_json(joint_dir / 'en.json', {'title': 'Joint title', 'common': {'ok': 'OK'}})
    i18n = make_engine().begin()

    assert i18n.translate('title') == 'Unit title'
    assert i18n.translate('common.ok') == 'OK'


def test_joint_hit_does_not_register_key(make_engine, site_dir, joint_dir, write_json):
    write_json(joint_dir / 'ru.json', {'common': {'ok': 'Хорошо'}})
    engine = make_engine()
    i18n = engine.begin()
    i18n.set_locale('ru')

    assert i18n.translate('common.ok') == 'Хорошо'
    assert not (site_dir / 'locales' / 'ru.json').exists()


def test_missing_key_is_registered_for_every_locale(make_engine, site_dir, read_json):
    i18n = make_engine().begin()

    assert i18n.translate('greeting') == 'greeting'

    assert read_json(site_dir / 'locales' / 'en.json') == {'greeting': ''}
    assert read_json(site_dir / 'locales' / 'ru.json') == {'greeting': ''}


def test_registration_keeps_existing_keys_and_values(make_engine, site_dir, write_json, read_json):
    write_json(site_dir / 'locales' / 'en.json', {'menu': {'open': 'Open'}})
    write_json(site_dir / 'locales' / 'ru.json', {'menu': {'open': 'Открыть'}, 'greeting': 'Привет'})
    i18n = make_engine().begin()

    assert i18n.translate('greeting') == 'greeting'

    assert read_json(site_dir / 'locales' / 'en.json') == {'menu': {'open': 'Open'}, 'greeting': ''}
    assert read_json(site_dir / 'locales' / 'ru.json') == {'menu': {'open': 'Открыть'}, 'greeting': 'Привет'}


def test_repeated_miss_is_idempotent(make_engine, site_dir, read_json, monkeypatch):
    engine = make_engine()
    writes = []
    original_write = engine.store.write_document

    def _counting_write(path, data):
        writes.append(path)
        original_write(path, data)

    monkeypatch.setattr(engine.store, 'write_document', _counting_write)
    i18n = engine.begin()

    assert i18n.translate('greeting') == 'greeting'
    assert i18n.translate('greeting') == 'greeting'
    assert engine.begin().translate('greeting') == 'greeting'

    assert len(writes) == 2
    assert read_json(site_dir / 'locales' / 'en.json') == {'greeting': ''}
    assert read_json(site_dir / 'locales' / 'ru.json') == {'greeting': ''}


def test_in_memory_fallback_is_scoped_to_active_locale(make_engine):
    engine = make_engine()
    en = engine.begin()
    ru = engine.begin()
    ru.set_locale('ru')

    assert ru.translate('Save') == 'Save'
    # en catalog is first read after registration and sees the disk placeholder
    assert en.translate('Save') == ''

    # both catalogs cached now; only the registering locale gets the key text
    assert en.translate('Cancel') == 'Cancel'
    assert ru.translate('Cancel') == ''
    assert en.translate('Cancel') == 'Cancel'


def test_unit_scope_follows_request_directories(make_engine, tmp_path, write_json, read_json):
    write_json(tmp_path / 'module' / 'i18n' / 'en.json', {'title': 'Module title'})
    engine = make_engine()
    i18n = engine.begin()
    i18n.set_base_dir(str(tmp_path / 'module'))
    i18n.set_directory('i18n')

    assert i18n.translate('title') == 'Module title'
    assert i18n.translate('subtitle') == 'subtitle'
    assert read_json(tmp_path / 'module' / 'i18n' / 'ru.json') == {'subtitle': ''}

    other = engine.begin()
    assert other.base_dir == engine.options.base_dir
    assert other.directory == 'locales'


def test_write_failure_still_returns_key(make_engine, tmp_path):
    blocker = tmp_path / 'not-a-dir'
    blocker.write_text('file in the way', encoding='utf-8')
    i18n = make_engine(base_dir=str(blocker)).begin()

    assert i18n.translate('greeting') == 'greeting'
    assert i18n.translate('greeting') == 'greeting'


def test_null_writer_leaves_files_untouched(make_engine, site_dir):
    i18n = make_engine(writer=NullCatalogWriter()).begin()

    assert i18n.translate('greeting') == 'greeting'
    assert not (site_dir / 'locales').exists()


def test_auto_register_option_selects_null_writer(make_engine, site_dir):
    engine = make_engine(auto_register=False)
    assert isinstance(engine.writer, NullCatalogWriter)
    assert engine.begin().translate('greeting') == 'greeting'
    assert not (site_dir / 'locales').exists()


def test_translate_with_positional_args(make_engine, site_dir, write_json):
    write_json(site_dir / 'locales' / 'en.json', {'title': 'Page: %s'})
    i18n = make_engine().begin()

    assert i18n.translate('title', ['Home']) == 'Page: Home'
    assert i18n.__('title', ['Home']) == 'Page: Home'


def test_dump_all_strings_uses_active_locale(make_engine, joint_dir, write_json):
    write_json(joint_dir / 'en.json', {'yes': 'Yes'})
    write_json(joint_dir / 'ru.json', {'yes': 'Да'})
    i18n = make_engine().begin()
    i18n.set_locale('ru')

    assert i18n.dump_all_strings() == {'yes': 'Да'}
    assert i18n.dump_all_strings('en') == {'yes': 'Yes'}


@pytest.mark.parametrize('text, args, expected', [
    ('Hello', None, 'Hello'),
    ('100%', None, '100%'),
    ('Hello, %s!', ['Bob'], 'Hello, Bob!'),
    ('%s of %d', ('page', 3), 'page of 3'),
    ('Hello, %s!', 'Bob', 'Hello, Bob!'),
    ('Hello, %s and %s!', ['Bob'], 'Hello, %s and %s!'),
    ('No placeholders', ['extra'], 'No placeholders'),
])
def test_format_message(text, args, expected):
    assert format_message(text, args) == expected


def test_registration_preserves_raw_json_values(make_engine, site_dir, write_json, read_json):
    original = {
        'flag': True,
        'count': 3,
        'items': ['a', 'b'],
        'note': None,
        'menu': {'open': 'Open'},
    }
    write_json(site_dir / 'locales' / 'en.json', original)
    i18n = make_engine().begin()

    assert i18n.translate('greeting') == 'greeting'
    assert i18n.translate('menu.close') == 'menu.close'

    assert read_json(site_dir / 'locales' / 'en.json') == {
        'flag': True,
        'count': 3,
        'items': ['a', 'b'],
        'note': None,
        'menu': {'open': 'Open', 'close': ''},
        'greeting': '',
    }
    assert read_json(site_dir / 'locales' / 'ru.json') == {'greeting': '', 'menu': {'close': ''}}


def test_unparsable_catalog_is_not_overwritten(make_engine, site_dir, write_json, read_json):
    broken = site_dir / 'locales' / 'ru.json'
    broken.parent.mkdir(parents=True)
    broken.write_text('{"menu": {"open": "Открыть"},}', encoding='utf-8')
    engine = make_engine()
    i18n = engine.begin()

    assert i18n.translate('greeting') == 'greeting'

    assert broken.read_text(encoding='utf-8') == '{"menu": {"open": "Открыть"},}'
    assert read_json(site_dir / 'locales' / 'en.json') == {'greeting': ''}

    ru = engine.begin()
    ru.set_locale('ru')
    assert ru.translate('greeting') == 'greeting'
    assert broken.read_text(encoding='utf-8') == '{"menu": {"open": "Открыть"},}'


def test_write_error_is_not_raised(make_engine, site_dir, monkeypatch):
    engine = make_engine()

    def _denied(path, data):
        raise PermissionError(13, 'Permission denied', path)

    monkeypatch.setattr(engine.store, 'write_document', _denied)
    i18n = engine.begin()

    assert i18n.translate('greeting') == 'greeting'
    assert i18n.translate('greeting') == 'greeting'
    assert not (site_dir / 'locales' / 'en.json').exists()


def test_dump_all_strings_normalizes_locale(make_engine, joint_dir, write_json):
    write_json(joint_dir / 'ru.json', {'yes': 'Да'})
    i18n = make_engine().begin()

    assert i18n.set_locale('RU') is True
    assert i18n.dump_all_strings('RU') == {'yes': 'Да'}
    assert i18n.dump_all_strings(' ru ') == {'yes': 'Да'}
