import threading

from toyredis.storage import KVStore


def test_get_returns_stored_value():
    store = KVStore()
    store.set("mykey", "myvalue")
    assert store.get("mykey") == "myvalue"


def test_missing_key_is_empty_string():
    store = KVStore()
    assert store.get("nonexistent") == ""


def test_overwrite_replaces_value():
    store = KVStore()
    store.set("testkey", "value1")
    store.set("testkey", "value2")
    assert store.get("testkey") == "value2"


def test_keys_are_independent():
    store = KVStore()
    store.set("key1", "value1")
    store.set("key2", "value2")
    assert (store.get("key1"), store.get("key2")) == ("value1", "value2")


def test_concurrent_writers_keep_every_key():
    store = KVStore()

    def writer(worker: int) -> None:
        for op in range(200):
            store.set(f"w{worker}_k{op}", f"w{worker}_v{op}")

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert all(
        store.get(f"w{worker}_k{op}") == f"w{worker}_v{op}"
        for worker in range(8)
        for op in range(200)
    )