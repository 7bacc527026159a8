import json

import pytest

from confstore.storage.base import normalize_path
from confstore.storage.file_backend import FileStorageBackend


def test_read_write_exists_delete(tmp_path):
    b = FileStorageBackend()
    path = tmp_path / 'sub' / 'cfg.json'

    assert b.read_json(path, {}) == {}
    assert b.exists(path) is False

    b.write_json(path, {'x': 1, 'nested': {'y': [1, 2]}})
    assert b.exists(path) is True
    assert path.read_text(encoding='utf-8') == json.dumps({'x': 1, 'nested': {'y': [1, 2]}}, indent=2) + '\n'
    assert b.read_json(path) == {'x': 1, 'nested': {'y': [1, 2]}}
    # no temp file left behind
    assert [p.name for p in path.parent.iterdir()] == ['cfg.json']

    assert b.delete(path) is True
    assert b.exists(path) is False
    assert b.delete(path) is False


def test_malformed_json_propagates(tmp_path):
    path = tmp_path / 'bad.json'
    path.write_text('{"a": ', encoding='utf-8')
    with pytest.raises(json.JSONDecodeError):
        FileStorageBackend().read_json(path, {})


def test_write_notifies_with_absolute_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    b = FileStorageBackend()
    seen = []
    b.subscribe(seen.append)
    b.write_json('cfg.json', {})
    assert seen == [normalize_path(tmp_path / 'cfg.json')]
