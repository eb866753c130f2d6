"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest

from notion_publish.config import Config, ConfigError, ENV_OVERRIDES, load_config

ENV_NAMES = ["NOTION_API_TOKEN", "MY_TOKEN", *ENV_OVERRIDES.values()]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults_from_environment(monkeypatch):
    monkeypatch.setenv("NOTION_API_TOKEN", "secret")
    monkeypatch.setenv("NOTION_BLOG_DATABASE_ID", "blog-db")

    config = load_config(dotenv=False)

    assert config.token == "secret"
    assert config.blog_database_id == "blog-db"
    assert config.diary_database_id == ""
    assert config.blog_output_dir == Path("./content/blog")
    assert config.diary_output_dir == Path("./content/diary")
    assert config.images_dir == Path("./public/images")
    assert config.images_url_prefix == "/images"


def test_yaml_file_with_env_override(tmp_path, monkeypatch):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "token_env: MY_TOKEN\n"
        "blog_database_id: from-file\n"
        "diary_database_id: diary-file\n"
        "images_dir: static/img\n"
    )
    monkeypatch.setenv("MY_TOKEN", "t0ken")
    monkeypatch.setenv("NOTION_BLOG_DATABASE_ID", "from-env")

    config = load_config(config_file, dotenv=False)

    assert config.token == "t0ken"
    assert config.blog_database_id == "from-env"
    assert config.diary_database_id == "diary-file"
    assert config.images_dir == Path("static/img")


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "nope.yaml", dotenv=False)


def test_config_file_must_be_mapping(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("- a\n- b\n")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(config_file, dotenv=False)


def test_invalid_yaml(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("key: [unclosed\n")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config(config_file, dotenv=False)


def test_unknown_field(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("output: x\n")
    with pytest.raises(ConfigError, match="Unknown"):
        load_config(config_file, dotenv=False)


class TestValidate:
    def test_token_required(self):
        with pytest.raises(ConfigError, match="NOTION_API_TOKEN"):
            Config(blog_database_id="b").validate("blog")

    @pytest.mark.parametrize("selection, missing", [
        ("blog", "NOTION_BLOG_DATABASE_ID"),
        ("diary", "NOTION_DIARY_DATABASE_ID"),
        ("all", "NOTION_BLOG_DATABASE_ID"),
    ])
    def test_database_ids_required(self, selection, missing):
        with pytest.raises(ConfigError, match=missing):
            Config(token="t").validate(selection)

    def test_all_needs_both(self):
        with pytest.raises(ConfigError, match="NOTION_DIARY_DATABASE_ID"):
            Config(token="t", blog_database_id="b").validate("all")

    def test_invalid_selection(self):
        with pytest.raises(ConfigError, match="Invalid database type"):
            Config(token="t", blog_database_id="b", diary_database_id="d").validate("wiki")

    def test_valid(self):
        Config(token="t", blog_database_id="b", diary_database_id="d").validate("all")
