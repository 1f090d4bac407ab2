"""Unit tests for path helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from podsmith import InvalidArtifactPath
from podsmith.details.as_iterator import str_iter, unique
from podsmith.details.paths import pods_root_path, relative_path, shellescape


class TestRelativePath:
    def test_inside_root(self) -> None:
        assert relative_path("/w/Pods/A/a.png", "/w/Pods", "A") == "A/a.png"

    def test_outside_root(self) -> None:
        assert relative_path("/w/dev/A/a.png", "/w/Pods", "A") == "../dev/A/a.png"

    def test_relative_path_is_rejected(self) -> None:
        with pytest.raises(InvalidArtifactPath) as excinfo:
            relative_path(Path("A/a.png"), Path("/w/Pods"), "A")
        assert excinfo.value.owner == "A"
        assert excinfo.value.path == "A/a.png"

    def test_pods_root_prefix(self) -> None:
        path = pods_root_path("/w/Pods/B/B.framework", "/w/Pods", "B")
        assert path == "${PODS_ROOT}/B/B.framework"


class TestShellescape:
    def test_plain_word(self) -> None:
        assert shellescape("Images") == "Images"

    def test_spaces_and_quotes(self) -> None:
        assert shellescape("My Bundle's") == "My\\ Bundle\\'s"

    def test_empty(self) -> None:
        assert shellescape("") == "''"


class TestAsIterator:
    def test_unique_keeps_first_occurrence(self) -> None:
        assert unique(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]

    def test_str_iter_scalar(self) -> None:
        assert list(str_iter("a")) == ["a"]

    def test_str_iter_rejects_other_types(self) -> None:
        with pytest.raises(TypeError):
            list(str_iter(3))
