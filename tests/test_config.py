import pytest
import yaml

from dbdump.config import Backend, DbSpec, load_config, resolve_db_spec, spec_from_url
from dbdump.errors import ConfigError, UsageError


def test_defaults_without_file(monkeypatch, tmp_path):
    monkeypatch.delenv('DATABASE_URL', raising=False)
    monkeypatch.chdir(tmp_path)
    cfg = load_config(None)
    assert cfg['project_root'] == str(tmp_path)
    assert cfg['binaries'] == {'mydumper': 'mydumper', 'myloader': 'myloader'}
    assert cfg['databases'] == {}


def test_load_yaml(monkeypatch, tmp_path):
    monkeypatch.delenv('DATABASE_URL', raising=False)
    path = tmp_path / 'c.yml'
    path.write_text(yaml.safe_dump({
        'project_root': '/srv/site',
        'binaries': {'mydumper': '/usr/local/bin/mydumper'},
        'databases': {'default': {'default': {'driver': 'mysql', 'database': 'app', 'port': '3307', 'ssl': {'ca': '/ca', 'key': None}}}},
        'table_selection': {'skip_tables': {'common': ['cache_*']}},
    }))
    cfg = load_config(str(path))
    assert cfg['binaries']['mydumper'] == '/usr/local/bin/mydumper'
    assert cfg['binaries']['myloader'] == 'myloader'
    assert cfg['table_selection'] == {'skip_tables': {'common': ['cache_*']}, 'structure_tables': {}}
    spec = resolve_db_spec(cfg)
    assert spec.port == 3307
    assert spec.ssl == {'ca': '/ca'}
    assert spec.backend is Backend.MYSQL


def test_missing_file():
    with pytest.raises(ConfigError):
        load_config('/nonexistent/dbdump.yml')


def test_database_url_fallback(monkeypatch):
    monkeypatch.setenv('DATABASE_URL', 'mysql://u%40x:p%3Aw@db:3306/shop')
    spec = resolve_db_spec(load_config(None))
    assert (spec.username, spec.password, spec.host, spec.port, spec.database) == ('u@x', 'p:w', 'db', 3306, 'shop')


def test_spec_from_url_ssl():
    raw = spec_from_url('mariadb://root@localhost/app?ssl-ca=/etc/ca.pem&ssl-cert=/c')
    assert raw['driver'] == 'mariadb'
    assert raw['ssl'] == {'ca': '/etc/ca.pem', 'cert': '/c'}


def test_unknown_connection():
    with pytest.raises(ConfigError, match='extra/default'):
        resolve_db_spec({'databases': {}}, 'extra')


def test_backend_check():
    assert DbSpec(driver='MySQL', database='x').require_supported() is Backend.MYSQL
    with pytest.raises(UsageError):
        DbSpec(driver='pgsql', database='x').require_supported()


def test_malformed_yaml(tmp_path):
    path = tmp_path / 'bad.yml'
    path.write_text("databases: [unclosed\n")
    with pytest.raises(ConfigError, match='Invalid YAML'):
        load_config(str(path))


def test_binaries_must_be_mapping(monkeypatch, tmp_path):
    monkeypatch.delenv('DATABASE_URL', raising=False)
    path = tmp_path / 'c.yml'
    path.write_text(yaml.safe_dump({'binaries': ['mydumper']}))
    with pytest.raises(ConfigError, match='binaries must be a mapping'):
        load_config(str(path))


def test_non_numeric_port():
    cfg = {'databases': {'default': {'default': {'database': 'app', 'port': 'abc'}}}}
    with pytest.raises(ConfigError, match='Invalid port'):
        resolve_db_spec(cfg)


def test_bad_database_url_port(monkeypatch):
    monkeypatch.setenv('DATABASE_URL', 'mysql://u@db:notaport/app')
    with pytest.raises(ConfigError, match='Invalid DATABASE_URL'):
        load_config(None)
