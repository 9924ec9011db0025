import pytest

from dataset_reducer.config import Config, DEFAULT_CONFIG_FILE
from dataset_reducer.exceptions import ConfigError


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def test_default_config_file_is_loaded():
    assert DEFAULT_CONFIG_FILE.exists()

    config = Config()
    assert config.get('sampler.max_sample_size') == 2000
    assert config.get('sampler.recency_tail') == 20
    assert config.get('summarizer.sample_rows') == 10
    assert config.get('forecaster.periods') == 3


def test_explicit_config_file(tmp_path):
    path = tmp_path / 'custom.yaml'
    path.write_text("sampler:\n  max_sample_size: 50\n")

    config = Config(str(path))
    assert config.get_stage_config('sampler') == {'max_sample_size': 50}
    assert config.get_stage_config('forecaster') == {}


def test_env_overrides(tmp_path, monkeypatch):
    path = tmp_path / 'custom.yaml'
    path.write_text("sampler:\n  max_sample_size: 50\n")
    monkeypatch.setenv('MAX_SAMPLE_SIZE', '75')
    monkeypatch.setenv('FORECAST_PERIODS', '6')

    config = Config(str(path))
    assert config.get('sampler.max_sample_size') == 75
    assert config.get('forecaster.periods') == 6


def test_dotenv_file_in_working_directory(tmp_path, monkeypatch):
    (tmp_path / '.env').write_text("RECENCY_TAIL=5\n")
    path = tmp_path / 'empty.yaml'
    path.write_text("")

    config = Config(str(path))
    assert config.get('sampler.recency_tail') == 5


def test_invalid_env_value(tmp_path, monkeypatch):
    path = tmp_path / 'empty.yaml'
    path.write_text("")
    monkeypatch.setenv('MAX_SAMPLE_SIZE', 'lots')

    with pytest.raises(ConfigError):
        Config(str(path))


def test_missing_explicit_file(tmp_path):
    with pytest.raises(ConfigError):
        Config(str(tmp_path / 'nope.yaml'))


def test_malformed_yaml(tmp_path):
    path = tmp_path / 'bad.yaml'
    path.write_text("sampler: [unclosed\n")

    with pytest.raises(ConfigError):
        Config(str(path))


def test_get_and_set_dot_notation(tmp_path):
    path = tmp_path / 'empty.yaml'
    path.write_text("")
    config = Config(str(path))

    config.set('sampler.exact_fill', True)
    assert config.get('sampler.exact_fill') is True
    assert config.get('missing.key', 'default') == 'default'
    assert config.to_dict() == {'sampler': {'exact_fill': True}}
