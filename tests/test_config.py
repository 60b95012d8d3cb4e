import json

from flynode.config.loader import get_config_path, load_config, save_config
from flynode.config.schema import Config, NodeConfig


def test_defaults_when_file_missing(tmp_path):
    cfg = load_config(tmp_path / "missing.json")
    assert cfg == Config()
    assert cfg.node.id_policy == "random"
    assert cfg.node.on_error == "abort"
    assert cfg.node.log_level == "INFO"
    assert cfg.node.seed is None


def test_load_camel_case_keys(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"node": {"idPolicy": "node_counter", "onError": "skip", "logLevel": "DEBUG", "seed": 3}}))

    cfg = load_config(path)

    assert cfg.node == NodeConfig(id_policy="node_counter", on_error="skip", log_level="DEBUG", seed=3)


def test_load_snake_case_keys(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"node": {"id_policy": "node_counter"}}))
    assert load_config(path).node.id_policy == "node_counter"


def test_invalid_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    assert load_config(path) == Config()

    path.write_text(json.dumps({"node": {"idPolicy": "snowflake"}}))
    assert load_config(path) == Config()


def test_save_then_load(tmp_path):
    path = tmp_path / "nested" / "config.json"
    cfg = Config(node=NodeConfig(on_error="skip", seed=11))

    save_config(cfg, path)

    assert json.loads(path.read_text())["node"]["onError"] == "skip"
    assert load_config(path) == cfg


def test_default_path_is_in_home():
    path = get_config_path()
    assert path.name == "config.json"
    assert path.parent.name == ".flynode"


def test_log_level_is_case_insensitive(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"node": {"logLevel": "debug"}}))
    assert load_config(path).node.log_level == "DEBUG"


def test_unknown_log_level_falls_back_to_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"node": {"logLevel": "FOO", "onError": "skip"}}))
    assert load_config(path) == Config()
