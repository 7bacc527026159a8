import pytest

from confstore.storage import MemoryStorage, Storage, StorageProxy


@pytest.fixture
def storage():
    return Storage(MemoryStorage(), 'proxy.json', 'ns')


def test_item_and_attribute_access_forward_to_storage(storage):
    proxy = storage.create_proxy()
    assert isinstance(proxy, StorageProxy)

    proxy['a'] = 1
    proxy.b = {'c': 2}
    assert storage.get('a') == 1
    assert storage.get('b') == {'c': 2}
    assert proxy['a'] == 1
    assert proxy.b == {'c': 2}


def test_membership_iteration_and_len(storage):
    storage.set({'x': 1, 'y': None})
    proxy = storage.create_proxy()
    assert 'x' in proxy
    assert 'y' in proxy
    assert 'z' not in proxy
    assert sorted(proxy) == ['x', 'y']
    assert len(proxy) == 2
    assert dict(proxy) == {'x': 1, 'y': None}


def test_missing_keys(storage):
    proxy = storage.create_proxy()
    with pytest.raises(KeyError):
        proxy['missing']
    with pytest.raises(AttributeError):
        proxy.missing
    assert proxy.get('missing', 'd') == 'd'


def test_delete(storage):
    proxy = storage.create_proxy()
    proxy['a'] = 1
    del proxy['a']
    assert storage.has('a') is False
    with pytest.raises(KeyError):
        del proxy['a']


def test_proxy_holds_no_state(storage):
    proxy = storage.create_proxy()
    storage.set('late', True)
    assert proxy.late is True
