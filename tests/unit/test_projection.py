from geoclusters.filtering.projection import filter_properties


def test_filter_properties_keeps_requested_keys():
    assert filter_properties({"foo": "bar", "cluster": 0}, ["cluster"]) == {"cluster": 0}


def test_filter_properties_omits_absent_keys():
    assert filter_properties({"foo": "bar"}, ["cluster", "foo"]) == {"foo": "bar"}
    assert filter_properties({"foo": "bar"}, []) == {}


def test_filter_properties_keeps_references():
    nested = {"deep": [1, 2]}
    result = filter_properties({"meta": nested, "x": 1}, ["meta"])
    assert result["meta"] is nested


def test_filter_properties_returns_new_dict():
    properties = {"cluster": 0}
    result = filter_properties(properties, ["cluster"])
    result["cluster"] = 99
    assert properties == {"cluster": 0}


def test_filter_properties_none_and_single_key():
    assert filter_properties(None, ["cluster"]) == {}
    assert filter_properties({"cluster": 0, "x": 1}, "cluster") == {"cluster": 0}
    assert filter_properties({0: "a", "0": "b"}, [0]) == {0: "a"}
