from __future__ import annotations

import copy
import pickle
import threading

import pytest

from featuresupport.directory import RegistryDirectory
from featuresupport.registry import Registry


def test_unknown_pair_is_absent(directory: RegistryDirectory) -> None:
    registry = directory.get_instance("taxonomy")
    assert registry.has("category", "hierarchy") is False
    assert registry.get("category", "hierarchy") is None
    assert registry.all("category") == {}
    assert registry.keys() == []


def test_add_without_args_stores_marker(directory: RegistryDirectory) -> None:
    registry = directory.get_instance("taxonomy")
    registry.add("category", "hierarchy")
    assert registry.has("category", "hierarchy")
    assert registry.get("category", "hierarchy") is True


def test_add_with_args_stores_ordered_args(directory: RegistryDirectory) -> None:
    registry = directory.get_instance("taxonomy")
    registry.add("category", "labels", "x", "y")
    assert registry.get("category", "labels") == ("x", "y")


def test_add_many_shares_args(directory: RegistryDirectory) -> None:
    registry = directory.get_instance("taxonomy")
    registry.add("tag", ["f1", "f2"], "x")
    assert registry.get("tag", "f1") == ("x",)
    assert registry.get("tag", "f2") == ("x",)
    assert registry.get("tag", "f1") is registry.get("tag", "f2")


def test_explicit_entry_points(directory: RegistryDirectory) -> None:
    registry = directory.get_instance("taxonomy")
    registry.add_one("tag", "rest", ["v2"])
    registry.add_many("tag", ("archive", "feed"))
    assert registry.get("tag", "rest") == ("v2",)
    assert registry.all("tag") == {"rest": ("v2",), "archive": True, "feed": True}


def test_add_overwrites_existing_value(directory: RegistryDirectory) -> None:
    registry = directory.get_instance("taxonomy")
    registry.add("tag", "rest", 1)
    registry.add("tag", "rest")
    assert registry.get("tag", "rest") is True


def test_add_takes_scalar_as_single_feature(directory: RegistryDirectory) -> None:
    registry = directory.get_instance("taxonomy")
    registry.add("tag", 3, "x")
    assert registry.get("tag", 3) == ("x",)
    assert registry.keys() == ["tag"]


def test_remove_and_prune(post_types: Registry) -> None:
    post_types.remove("post", "thumbnail")
    assert post_types.has("post", "thumbnail") is False
    assert "post" not in post_types
    assert post_types.keys() == ["page"]
    post_types.remove("post", "thumbnail")
    post_types.remove("nobody", "nothing")
    post_types.remove("page", "nothing")
    assert post_types.all("page") == {"thumbnail": True, "editor": ("a",)}


def test_all_returns_snapshot(post_types: Registry) -> None:
    snapshot = post_types.all("page")
    snapshot["comments"] = True
    assert post_types.has("page", "comments") is False


def test_keys_follow_insertion_order(post_types: Registry) -> None:
    assert post_types.keys() == ["post", "page"]
    assert list(post_types) == ["post", "page"]
    assert len(post_types) == 2


def test_clear(post_types: Registry) -> None:
    post_types.clear()
    assert post_types.keys() == []


def test_direct_construction_is_refused() -> None:
    with pytest.raises(TypeError):
        Registry("site")


def test_copy_and_pickle_are_refused(post_types: Registry) -> None:
    with pytest.raises(TypeError):
        copy.copy(post_types)
    with pytest.raises(TypeError):
        copy.deepcopy(post_types)
    with pytest.raises(TypeError):
        pickle.dumps(post_types)


def test_concurrent_adds_are_all_recorded(directory: RegistryDirectory) -> None:
    registry = directory.get_instance("network")

    def worker(prefix: str) -> None:
        for idx in range(200):
            registry.add(f"{prefix}{idx}", "enabled")

    threads = [threading.Thread(target=worker, args=(p,)) for p in "abcd"]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert len(registry.where("enabled")) == 800
