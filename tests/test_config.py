"""Tests for engine configuration and level-of-detail presets."""

import logging

import pytest

from yaphomotopy.config import (
    DEFAULT_LOD, YAPHOMOTOPY_CONFIG, EngineConfig, LodTable, default_config,
    load_config,
)


class TestEngineConfig:

    def test_defaults(self):
        cfg = EngineConfig()
        assert cfg.workers == 1
        assert cfg.chunk_size == 4096
        assert cfg.domain_policy == 'ignore'

    @pytest.mark.parametrize('kwargs', [
        {'workers': 0},
        {'workers': True},
        {'chunk_size': -1},
        {'chunk_size': 2.5},
        {'domain_policy': 'panic'},
    ])
    def test_validation(self, kwargs):
        with pytest.raises(ValueError):
            EngineConfig(**kwargs)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            EngineConfig().workers = 3


class TestLodTable:

    def test_default_levels(self):
        assert DEFAULT_LOD.names() == ('low', 'medium', 'high')
        assert DEFAULT_LOD.resolution_for('low', 2) == (8, 8)
        assert DEFAULT_LOD.resolution_for('high', 3) == (32, 32, 32)

    def test_bad_entries(self):
        with pytest.raises(ValueError):
            LodTable({'x': {'patch': [4]}})
        with pytest.raises(ValueError):
            LodTable({'x': {'curve': [1]}})
        with pytest.raises(ValueError):
            LodTable({'x': {'surface': [4, 4]}})
        with pytest.raises(ValueError):
            LodTable({'x': {}})

    def test_lookup_errors(self):
        with pytest.raises(KeyError):
            DEFAULT_LOD.resolution_for('extreme', 1)
        with pytest.raises(ValueError):
            DEFAULT_LOD.resolution_for('low', 4)

    def test_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_LOD.levels['new'] = {'curve': (4,)}

    def test_merged_overrides(self):
        table = DEFAULT_LOD.merged(LodTable({'low': {'curve': 5}}))
        assert table.resolution_for('low', 1) == (5,)
        assert table.resolution_for('medium', 1) == (32,)
        assert DEFAULT_LOD.resolution_for('low', 1) == (8,)


class TestLoadConfig:

    def test_round_trip(self, tmp_path, caplog):
        path = tmp_path / 'homotopy.yaml'
        path.write_text(
            "engine:\n"
            "  workers: 4\n"
            "  domain_policy: warn\n"
            "lod:\n"
            "  preview:\n"
            "    curve: [6]\n"
            "    patch: [6, 4]\n",
            encoding='utf-8',
        )
        with caplog.at_level(logging.INFO, logger='yaphomotopy'):
            engine, lod = load_config(path)
        assert engine == EngineConfig(workers=4, domain_policy='warn')
        assert lod.resolution_for('preview', 2) == (6, 4)
        assert lod.resolution_for('medium', 2) == (24, 24)
        assert 'Loaded configuration' in caplog.text

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / 'empty.yaml'
        path.write_text('', encoding='utf-8')
        engine, lod = load_config(path)
        assert engine == EngineConfig()
        assert lod.names() == DEFAULT_LOD.names()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / 'nope.yaml')

    @pytest.mark.parametrize('text', [
        '- 1\n- 2\n',
        'engine: [1, 2]\n',
        'engine:\n  threads: 3\n',
        'lod: 7\n',
    ])
    def test_malformed(self, tmp_path, text):
        path = tmp_path / 'bad.yaml'
        path.write_text(text, encoding='utf-8')
        with pytest.raises(ValueError):
            load_config(path)

    def test_default_config_env(self, tmp_path, monkeypatch):
        monkeypatch.delenv(YAPHOMOTOPY_CONFIG, raising=False)
        assert default_config() == (EngineConfig(), DEFAULT_LOD)
        path = tmp_path / 'env.yaml'
        path.write_text('engine:\n  chunk_size: 128\n', encoding='utf-8')
        monkeypatch.setenv(YAPHOMOTOPY_CONFIG, str(path))
        engine, _ = default_config()
        assert engine.chunk_size == 128
