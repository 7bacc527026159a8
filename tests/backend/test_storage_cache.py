import gc

import pytest

from confstore.storage import MemoryStorage, Storage
from confstore.storage.base import normalize_path


class CountingBackend(MemoryStorage):
    def __init__(self):
        super().__init__()
        self.reads = 0

    def _read_text(self, path):
        self.reads += 1
        return super()._read_text(path)

    def write_silently(self, path, text):
        # simulate a writer that does not go through this backend's notify
        self._write_text(normalize_path(path), text)


@pytest.fixture
def fs():
    return CountingBackend()


def test_cached_reads_do_not_touch_backend(fs):
    s = Storage(fs, 'cfg.json', 'ns')
    reads = fs.reads
    s.get('a')
    s.get_all()
    s.keys()
    assert fs.reads == reads


def test_disable_cache_reads_every_time(fs):
    s = Storage(fs, 'cfg.json', 'ns', {'disableCache': True})
    reads = fs.reads
    s.get('a')
    s.get('a')
    assert fs.reads == reads + 2
    assert s._cached_store is None


def test_notification_for_own_path_invalidates(fs):
    s = Storage(fs, 'cfg.json', 'ns')
    assert s.get('a') is None
    fs.write_silently('cfg.json', '{"ns": {"a": 1}}')
    assert s.get('a') is None
    fs.notify('cfg.json')
    assert s.get('a') == 1


def test_notification_without_path_invalidates(fs):
    s = Storage(fs, 'cfg.json', 'ns')
    fs.write_silently('cfg.json', '{"ns": {"a": 1}}')
    fs.notify()
    assert s.get('a') == 1


def test_notification_for_other_path_keeps_cache(fs):
    s = Storage(fs, 'cfg.json', 'ns')
    fs.write_silently('cfg.json', '{"ns": {"a": 1}}')
    fs.notify('other.json')
    assert s.get('a') is None


def test_disable_cache_by_file_ignores_notifications(fs):
    s = Storage(fs, 'cfg.json', 'ns', {'disableCacheByFile': True})
    fs.write_silently('cfg.json', '{"ns": {"a": 1}}')
    fs.notify('other.json')
    assert s.get('a') is None
    fs.notify()
    assert s.get('a') is None
    s.invalidate()
    assert s.get('a') == 1


def test_own_writes_visible_with_disable_cache_by_file(fs):
    s = Storage(fs, 'cfg.json', 'ns', {'disableCacheByFile': True})
    s.merge({'a': {'b': 1}})
    assert s.get_all() == {'a': {'b': 1}}
    s.defaults({'c': 2})
    assert s.get('c') == 2


def test_write_by_sibling_invalidates_other_instances(fs):
    a = Storage(fs, 'cfg.json', 'a')
    root = Storage(fs, 'cfg.json')
    assert root.get_all() == {}
    a.set('x', 1)
    assert root.get_all() == {'a': {'x': 1}}


def test_write_always_rereads_before_merging(fs):
    s = Storage(fs, 'cfg.json', 'ns')
    s.get_all()
    fs.write_silently('cfg.json', '{"other": true}')
    reads = fs.reads
    s.set('a', 1)
    assert fs.reads == reads + 1
    assert fs.read_json('cfg.json') == {'other': True, 'ns': {'a': 1}}


def test_close_releases_subscription(fs):
    s = Storage(fs, 'cfg.json', 'ns')
    assert len(fs._listeners) == 1
    s.close()
    s.close()
    assert fs._listeners == []


def test_context_manager_closes(fs):
    with Storage(fs, 'cfg.json', 'ns') as s:
        s.set('a', 1)
        assert len(fs._listeners) == 1
    assert fs._listeners == []


def test_discarded_storage_unsubscribes(fs):
    s = Storage(fs, 'cfg.json', 'ns')
    assert len(fs._listeners) == 1
    del s
    gc.collect()
    assert fs._listeners == []
