from monkey.environment import Environment


def test_get_and_set():
    env = Environment()
    assert env.set('a', 1) == 1
    assert env.get('a') == 1
    assert env.get('b') is None


def test_lookup_walks_parents():
    outer = Environment()
    outer.set('a', 1)
    inner = outer.extend()
    assert inner.parent is outer
    assert inner.get('a') == 1
    assert inner.get('b') is None


def test_set_writes_local_frame():
    outer = Environment()
    outer.set('a', 1)
    inner = Environment(parent=outer)
    inner.set('a', 2)
    assert inner.get('a') == 2
    assert outer.get('a') == 1
    assert inner.values == {'a': 2}


def test_parent_bindings_added_later_are_visible():
    outer = Environment()
    inner = outer.extend()
    outer.set('late', True)
    assert inner.get('late') is True
