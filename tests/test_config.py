import pytest

from berryargs import BerrySettings

_KEYS = ('BERRYARGS_STRICT_COERCION', 'BERRYARGS_LOG_PREPARE_HOOKS')


@pytest.fixture
def clean_env(monkeypatch):
    # setenv first so monkeypatch removes whatever load_dotenv writes
    for key in _KEYS:
        monkeypatch.setenv(key, '')
        monkeypatch.delenv(key)
    return monkeypatch


def test_defaults(clean_env, tmp_path):
    settings = BerrySettings.from_env(tmp_path / 'missing.env')
    assert settings == BerrySettings(strict_coercion=True, log_prepare_hooks=False)


def test_values_from_dotenv_file(clean_env, tmp_path):
    env = tmp_path / '.env'
    env.write_text('BERRYARGS_STRICT_COERCION=no\nBERRYARGS_LOG_PREPARE_HOOKS=on\n')
    settings = BerrySettings.from_env(env)
    assert settings.strict_coercion is False
    assert settings.log_prepare_hooks is True


def test_environment_wins_over_dotenv(clean_env, tmp_path):
    env = tmp_path / '.env'
    env.write_text('BERRYARGS_STRICT_COERCION=false\n')
    clean_env.setenv('BERRYARGS_STRICT_COERCION', 'true')
    assert BerrySettings.from_env(env).strict_coercion is True


def test_custom_prefix(clean_env, tmp_path):
    clean_env.setenv('MYAPP_LOG_PREPARE_HOOKS', '1')
    settings = BerrySettings.from_env(tmp_path / 'missing.env', prefix='MYAPP_')
    assert settings.log_prepare_hooks is True


def test_invalid_flag_value(clean_env, tmp_path):
    clean_env.setenv('BERRYARGS_STRICT_COERCION', 'maybe')
    with pytest.raises(ValueError, match='BERRYARGS_STRICT_COERCION'):
        BerrySettings.from_env(tmp_path / 'missing.env')
