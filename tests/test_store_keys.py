import fnmatch

from store import keys


def test_keys_format():
    assert keys.graph("abc") == "dg:graph:abc"
    assert fnmatch.fnmatch(keys.graph("abc"), keys.graph_pattern())
    assert not fnmatch.fnmatch("bc:tenant:events", keys.graph_pattern())
