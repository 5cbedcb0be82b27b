from __future__ import annotations

from pathlib import Path

from current_activity.integration.source_lookup import find_activity_sources, simple_class_name


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("", encoding="utf-8")
    return path


def test_simple_class_name() -> None:
    assert simple_class_name("com.example.app.MainActivity") == "MainActivity"
    assert simple_class_name(".HomeActivity") == "HomeActivity"
    assert simple_class_name("MainActivity") == "MainActivity"


def test_java_is_preferred_over_kotlin(tmp_path: Path) -> None:
    java = _touch(tmp_path / "app/src/main/java/com/example/MainActivity.java")
    _touch(tmp_path / "app/src/main/kotlin/com/example/MainActivity.kt")

    assert find_activity_sources(tmp_path, "com.example.MainActivity") == [java]


def test_kotlin_fallback(tmp_path: Path) -> None:
    kt = _touch(tmp_path / "app/src/main/kotlin/com/example/MainActivity.kt")
    assert find_activity_sources(tmp_path, "com.example.MainActivity") == [kt]


def test_all_matches_are_returned_sorted_and_build_dirs_skipped(tmp_path: Path) -> None:
    a = _touch(tmp_path / "a/MainActivity.java")
    b = _touch(tmp_path / "b/MainActivity.java")
    _touch(tmp_path / "app/build/generated/MainActivity.java")
    _touch(tmp_path / ".git/MainActivity.java")

    assert find_activity_sources(tmp_path, "x.MainActivity") == [a, b]


def test_no_match(tmp_path: Path) -> None:
    _touch(tmp_path / "Other.java")
    assert find_activity_sources(tmp_path, "x.MainActivity") == []
