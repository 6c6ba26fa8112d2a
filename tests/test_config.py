import pytest

from edgemap.config import EdgeConfig, load_config
from edgemap.convolution import BoundaryPolicy
from edgemap.errors import EdgeMapError, InvalidSigma, InvalidThresholdRange

ENV_VARS = ("EDGEMAP_SIGMA", "EDGEMAP_LOW_THRESHOLD", "EDGEMAP_HIGH_THRESHOLD", "EDGEMAP_BOUNDARY")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def test_defaults():
    cfg = EdgeConfig()
    assert (cfg.sigma, cfg.low_threshold, cfg.high_threshold) == (1.4, 25, 70)
    assert cfg.boundary is BoundaryPolicy.DROP


def test_boundary_name_is_coerced():
    assert EdgeConfig(boundary="wrap").boundary is BoundaryPolicy.WRAP
    with pytest.raises(EdgeMapError):
        EdgeConfig(boundary="mirror")


def test_validation():
    with pytest.raises(InvalidSigma):
        EdgeConfig(sigma=0)
    with pytest.raises(InvalidThresholdRange):
        EdgeConfig(low_threshold=80, high_threshold=70)


def test_yaml_file_overrides_defaults(tmp_path):
    path = tmp_path / "edges.yaml"
    path.write_text("sigma: 2.0\nhigh_threshold: 90\nboundary: extend\n")
    cfg = load_config(path, use_env=False)
    assert cfg.sigma == 2.0
    assert cfg.low_threshold == 25
    assert cfg.high_threshold == 90
    assert cfg.boundary is BoundaryPolicy.EXTEND


def test_unknown_yaml_keys_are_rejected(tmp_path):
    path = tmp_path / "edges.yaml"
    path.write_text("sigma: 2.0\nkernel_size: 7\n")
    with pytest.raises(EdgeMapError):
        load_config(path, use_env=False)


def test_environment_overrides_yaml(tmp_path, monkeypatch):
    path = tmp_path / "edges.yaml"
    path.write_text("low_threshold: 10\n")
    monkeypatch.setenv("EDGEMAP_LOW_THRESHOLD", "40")
    monkeypatch.setenv("EDGEMAP_BOUNDARY", "ZERO")
    cfg = load_config(path)
    assert cfg.low_threshold == 40
    assert cfg.boundary is BoundaryPolicy.ZERO


def test_malformed_environment_value(monkeypatch):
    monkeypatch.setenv("EDGEMAP_SIGMA", "wide")
    with pytest.raises(EdgeMapError):
        load_config()


def test_to_dict_round_trips():
    cfg = EdgeConfig(sigma=1.0, boundary="zero")
    assert EdgeConfig(**cfg.to_dict()) == cfg


def test_non_numeric_sigma_in_yaml(tmp_path):
    path = tmp_path / "edges.yaml"
    path.write_text("sigma: wide\n")
    with pytest.raises(InvalidSigma):
        load_config(path, use_env=False)


def test_boolean_sigma_is_rejected():
    with pytest.raises(InvalidSigma):
        EdgeConfig(sigma=True)


def test_malformed_yaml(tmp_path):
    path = tmp_path / "edges.yaml"
    path.write_text("sigma: [1.4\n")
    with pytest.raises(EdgeMapError):
        load_config(path, use_env=False)
