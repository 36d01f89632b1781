"""Tests for the seed vocabulary loaders."""

import json

import pytest

from word_space.loaders import (
    CsvVocabularyLoader,
    JsonVocabularyLoader,
    get_loader,
    list_loaders,
    register_loader,
)
from word_space.loaders.base import BaseVocabularyLoader


class TestJsonLoader:

    def test_load(self, tmp_path):
        path = tmp_path / "vocab.json"
        path.write_text(json.dumps(["king", "queen", "apple"]))

        loader = JsonVocabularyLoader(path)
        assert loader.load() == ["king", "queen", "apple"]
        assert loader.name == "json:vocab.json"

    def test_drops_invalid_and_duplicates(self, tmp_path):
        path = tmp_path / "vocab.json"
        path.write_text(json.dumps(["king", "King", " queen ", "two words", "", "r2d2", "cat"]))

        assert JsonVocabularyLoader(path).load() == ["king", "queen", "cat"]

    def test_max_items(self, tmp_path):
        path = tmp_path / "vocab.json"
        path.write_text(json.dumps(["a", "b", "c", "d"]))

        assert JsonVocabularyLoader(path, max_items=2).load() == ["a", "b"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            JsonVocabularyLoader(tmp_path / "nope.json").load()

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "vocab.json"
        path.write_text("[\"king\",")

        with pytest.raises(ValueError, match="Invalid JSON"):
            JsonVocabularyLoader(path).load()

    @pytest.mark.parametrize("payload", [{"words": ["king"]}, ["king", 3], "king"])
    def test_wrong_shape(self, tmp_path, payload):
        path = tmp_path / "vocab.json"
        path.write_text(json.dumps(payload))

        with pytest.raises(ValueError, match="list of strings"):
            JsonVocabularyLoader(path).load()

    def test_bundled_vocabulary(self):
        words = JsonVocabularyLoader().load()
        assert len(words) >= 2
        assert "king" in words


class TestCsvLoader:

    def test_auto_detects_column(self, tmp_path):
        path = tmp_path / "vocab.csv"
        path.write_text("id,Word\n1,sun\n2,moon\n3,\n4,star\n")

        assert CsvVocabularyLoader(path).load() == ["sun", "moon", "star"]

    def test_explicit_column(self, tmp_path):
        path = tmp_path / "vocab.csv"
        path.write_text("label,other\nriver,x\nlake,y\n")

        loader = CsvVocabularyLoader(path, column="label")
        assert loader.load() == ["river", "lake"]
        assert loader.name == "csv:vocab.csv"

    def test_keeps_na_like_words(self, tmp_path):
        path = tmp_path / "vocab.csv"
        path.write_text("word\nnan\nnull\nNone\n")

        assert CsvVocabularyLoader(path).load() == ["nan", "null", "None"]

    def test_no_word_column(self, tmp_path):
        path = tmp_path / "vocab.csv"
        path.write_text("a,b\n1,2\n")

        with pytest.raises(ValueError, match="Could not find a word column"):
            CsvVocabularyLoader(path).load()

    def test_unknown_explicit_column(self, tmp_path):
        path = tmp_path / "vocab.csv"
        path.write_text("word\nsun\n")

        with pytest.raises(ValueError):
            CsvVocabularyLoader(path, column="term").load()


class TestRegistry:

    def test_builtin_loaders(self):
        assert {"json", "csv"} <= set(list_loaders())

    def test_get_loader(self, tmp_path):
        loader = get_loader("csv", path=tmp_path / "vocab.csv")
        assert isinstance(loader, CsvVocabularyLoader)

    def test_unknown_loader(self):
        with pytest.raises(ValueError, match="Unknown loader"):
            get_loader("parquet")

    def test_register_rejects_duplicates_and_non_loaders(self):
        with pytest.raises(ValueError):
            @register_loader("json")
            class AnotherJson(BaseVocabularyLoader):
                pass

        with pytest.raises(TypeError):
            @register_loader("plain")
            class NotALoader:
                pass
