"""Tests for layered clip config resolution."""

from keyclip.config import DEFAULT_CLIP_CONFIG, resolve_config


class TestResolveConfig:
    def test_unset_never_erases_lower_layer(self):
        layers = [{"a": 1, "b": 2}, {"b": None}, {"a": None, "b": 3}]
        assert resolve_config(layers, ["a", "b"]) == {"a": 1, "b": 3}

    def test_later_layer_wins(self):
        layers = [{"easing": "easeIn"}, {"easing": "easeOut"}]
        assert resolve_config(layers, ["easing"]) == {"easing": "easeOut"}

    def test_missing_key_behaves_like_unset(self):
        layers = [{"a": 1}, {}, {"b": 2}]
        assert resolve_config(layers, ["a", "b"]) == {"a": 1, "b": 2}

    def test_unrecognized_keys_dropped(self):
        layers = [{"a": 1, "extra": True}, {"other": 5}]
        assert resolve_config(layers, ["a"]) == {"a": 1}

    def test_none_layers_ignored(self):
        assert resolve_config([None, {"a": 1}, None], ["a"]) == {"a": 1}

    def test_key_never_set_is_left_out(self):
        assert resolve_config([{"a": None}], ["a", "b"]) == {}

    def test_no_keys_keeps_everything_in_first_seen_order(self):
        result = resolve_config([{"b": 1, "a": None}, {"a": 2, "c": 3}])
        assert result == {"b": 1, "a": 2, "c": 3}
        assert list(result) == ["b", "a", "c"]

    def test_does_not_mutate_layers(self):
        low = {"a": 1}
        high = {"a": 2}
        resolve_config([low, high], ["a"])
        assert low == {"a": 1}
        assert high == {"a": 2}

    def test_template_defaults_as_lowest_layer(self):
        result = resolve_config([DEFAULT_CLIP_CONFIG, {"easing": None}], list(DEFAULT_CLIP_CONFIG))
        assert result == {"easing": "linear"}
