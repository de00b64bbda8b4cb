"""Tests for relative path computation."""

import os

from animizer.utils.paths import relative_path


def native(*parts):
    return os.path.join(*parts)


def test_file_below_directory():
    """Test the basic case from a parent directory."""
    assert relative_path("/a/b/c/image.png", "/a/b/") == native("c", "image.png")


def test_trailing_separator_optional():
    """Test that a missing trailing separator changes nothing."""
    assert relative_path("/a/b/c/image.png", "/a/b") == relative_path("/a/b/c/image.png", "/a/b/")
    assert relative_path("/a/b/c/image.png", "/a/b" + os.sep) == native("c", "image.png")


def test_sibling_directory():
    """Test climbing out of the reference directory."""
    assert relative_path("/a/x/img.png", "/a/b") == native("..", "x", "img.png")
    assert relative_path("/sprites/idle.png", "/a/b/c") == native("..", "..", "..", "sprites", "idle.png")


def test_file_in_directory():
    """Test a file directly inside the reference directory."""
    assert relative_path("/a/b/img.png", "/a/b") == "img.png"


def test_special_characters_are_not_escaped():
    """Test that spaces, percent signs and non-ASCII survive unescaped."""
    assert relative_path("/a/b/my sprite%20.png", "/a/b") == "my sprite%20.png"
    assert relative_path("/a/b/héros/#1.png", "/a") == native("b", "héros", "#1.png")


def test_unnormalized_inputs():
    """Test that dot segments are resolved before comparing."""
    assert relative_path("/a/b/../b/c/./image.png", "/a/b/c/..") == native("c", "image.png")


def test_relative_target_uses_working_dir(tmp_path, monkeypatch):
    """Test that relative inputs are resolved against the working directory."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "out").mkdir()

    assert relative_path("sprites/a.png", "out") == native("..", "sprites", "a.png")
    assert relative_path(tmp_path / "sprites" / "a.png", tmp_path) == native("sprites", "a.png")


def test_pure():
    """Test that the same inputs give the same result."""
    results = {relative_path("/a/b/c/image.png", "/a") for _ in range(3)}

    assert results == {native("b", "c", "image.png")}
