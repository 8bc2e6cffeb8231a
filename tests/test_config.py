from pathlib import Path

from cotacao.core.config import Settings


def test_derived_db_path_creates_data_dir(tmp_path: Path):
    settings = Settings(_env_file=None, data_dir=tmp_path / "data")
    settings.init_post_load()

    assert settings.db_path == tmp_path / "data" / "exchange_rates.db"
    assert (tmp_path / "data").is_dir()


def test_explicit_db_path_directory_is_left_alone(tmp_path: Path):
    settings = Settings(
        _env_file=None,
        data_dir=tmp_path / "data",
        db_path=tmp_path / "elsewhere" / "rates.db",
    )
    settings.init_post_load()

    assert settings.db_path == tmp_path / "elsewhere" / "rates.db"
    assert not (tmp_path / "elsewhere").exists()
    assert not (tmp_path / "data").exists()
