"""Tests for SliceCache."""

from pathlib import Path

import pytest

from slice_reader.core.exceptions import CacheFilesystemError
from slice_reader.runtime.cache import SliceCache


class TestSliceCache:
    def test_path_for_joins_root_and_name(self, cache: SliceCache):
        assert cache.path_for("myslice") == cache.root / "myslice"

    def test_name_for_is_inverse_of_path_for(self, cache: SliceCache):
        assert cache.name_for(cache.path_for("foo")) == "foo"
        assert cache.name_for(cache.path_for("team/foo")) == "team/foo"

    def test_name_for_rejects_paths_outside_root(self, cache: SliceCache, tmp_path):
        with pytest.raises(ValueError, match="not inside cache root"):
            cache.name_for(tmp_path / "elsewhere")

    @pytest.mark.parametrize("name", ["", "../escape", "/abs/path"])
    def test_path_for_rejects_invalid_names(self, cache: SliceCache, name: str):
        with pytest.raises(ValueError, match="Invalid slice name"):
            cache.path_for(name)

    def test_default_root_uses_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SLICE_CACHE_ROOT", str(tmp_path / "custom"))
        assert SliceCache().root == tmp_path / "custom"

    def test_default_root_is_temp_slices(self, monkeypatch):
        monkeypatch.delenv("SLICE_CACHE_ROOT", raising=False)
        monkeypatch.setattr("slice_reader.config.platform.system", lambda: "Linux")
        assert SliceCache().root == Path("/tmp") / "slices"

    def test_default_root_on_windows_uses_temp_env(self, monkeypatch, tmp_path):
        monkeypatch.delenv("SLICE_CACHE_ROOT", raising=False)
        monkeypatch.setenv("TEMP", str(tmp_path))
        monkeypatch.setattr("slice_reader.config.platform.system", lambda: "Windows")
        assert SliceCache().root == tmp_path / "slices"

    def test_reset_and_create_creates_missing_parents(self, cache: SliceCache):
        path = cache.path_for("fresh")

        result = cache.reset_and_create(path)

        assert result == path
        assert path.is_dir()
        assert list(path.iterdir()) == []

    def test_reset_and_create_purges_existing_contents(self, cache: SliceCache):
        path = cache.path_for("stale")
        (path / "nested").mkdir(parents=True)
        (path / "nested" / "old.txt").write_text("old")
        (path / "top.txt").write_text("old")

        cache.reset_and_create(path)

        assert path.is_dir()
        assert list(path.iterdir()) == []

    def test_reset_and_create_accepts_empty_leftover_directory(
        self, cache: SliceCache
    ):
        path = cache.path_for("leftover")
        path.mkdir(parents=True)

        cache.reset_and_create(path)

        assert path.is_dir()

    def test_reset_and_create_wraps_filesystem_errors(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file where the root should be")
        cache = SliceCache(blocker)

        with pytest.raises(CacheFilesystemError, match="Failed to prepare cache"):
            cache.reset_and_create(cache.path_for("x"))


class TestSliceNameResolution:
    def test_name_for_resolves_relative_path_against_cwd(
        self, cache: SliceCache, monkeypatch
    ):
        cache.root.mkdir(parents=True)
        monkeypatch.chdir(cache.root)

        assert cache.name_for("foo") == "foo"

    def test_name_for_with_relative_root(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        cache = SliceCache("slices")

        assert cache.name_for(tmp_path / "slices" / "foo") == "foo"

    def test_name_for_rejects_root_itself(self, cache: SliceCache):
        with pytest.raises(ValueError, match="is the cache root"):
            cache.name_for(cache.root)
