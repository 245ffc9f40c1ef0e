"""Tests for classification and execution."""

from __future__ import annotations

import re
from pathlib import Path

from resprune.models import (
    AssetType,
    DeclaredAsset,
    DetectorKind,
    ElementLocation,
    FileLocation,
    Reference,
    ReferenceLocation,
)
from resprune.pruner import REMOVAL_REASON, classify, execute


def _file_asset(name: str, asset_type: AssetType = AssetType.DRAWABLE, path: Path | None = None):
    return DeclaredAsset(name, asset_type, FileLocation(path or Path(f"res/drawable/{name}.png")))


def _value_asset(name: str, asset_type: AssetType, path: Path, start: int, end: int | None = None):
    return DeclaredAsset(name, asset_type, ElementLocation(path, start, end or start))


def _ref(name: str, asset_type: AssetType) -> Reference:
    return Reference(
        name, asset_type, ReferenceLocation(Path("Main.kt"), 1, 1), DetectorKind.KOTLIN_SYMBOL
    )


def test_everything_unreferenced_is_removed() -> None:
    declared = [
        _file_asset("icon"),
        _file_asset("main", AssetType.LAYOUT),
        _value_asset("title", AssetType.STRING, Path("values/strings.xml"), 2),
    ]

    result = classify(declared, set())

    assert result.to_remove == declared
    assert result.to_keep == []


def test_matching_reference_keeps_asset() -> None:
    icon = _file_asset("icon")

    assert classify([icon], set()).to_remove == [icon]

    result = classify([icon], {_ref("icon", AssetType.DRAWABLE)})
    assert result.to_keep == [icon]
    assert result.reason_for(icon) == "referenced"


def test_exclude_pattern_full_match_always_keeps() -> None:
    launcher = _file_asset("ic_launcher_round", AssetType.MIPMAP)
    partial = _file_asset("my_ic_launcher", AssetType.MIPMAP)

    result = classify([launcher, partial], set(), ["^ic_launcher.*"])

    assert result.to_keep == [launcher]
    assert result.to_remove == [partial]
    assert result.reason_for(launcher) == "matched exclude pattern: ^ic_launcher.*"


def test_exclude_patterns_accept_compiled_regexes() -> None:
    asset = _file_asset("debug_banner")

    result = classify([asset], set(), [re.compile(r"debug_\w+")])

    assert result.to_keep == [asset]


def test_target_types_keep_out_of_scope_assets() -> None:
    text = _value_asset("unused_text", AssetType.STRING, Path("values/strings.xml"), 3)
    icon = _file_asset("unused_icon")

    result = classify([text, icon], set(), target_types={"drawable"})

    assert result.to_keep == [text]
    assert result.to_remove == [icon]
    assert result.reason_for(text) == "outside target resource types"


def test_exclude_types_win_over_target_types() -> None:
    icon = _file_asset("unused_icon")

    result = classify([icon], set(), target_types={"drawable"}, exclude_types={"drawable"})

    assert result.to_keep == [icon]
    assert result.reason_for(icon) == "excluded resource type"


def test_type_filters_win_over_references() -> None:
    icon = _file_asset("icon")

    result = classify([icon], {_ref("icon", AssetType.DRAWABLE)}, exclude_types={"drawable"})

    assert result.reason_for(icon) == "excluded resource type"


def test_name_only_match_keeps_unrelated_asset_of_another_type() -> None:
    # Known over-approximation: a string named "header" keeps an unused layout named "header".
    layout = _file_asset("header", AssetType.LAYOUT)

    result = classify([layout], {_ref("header", AssetType.STRING)})

    assert result.to_keep == [layout]
    assert result.reason_for(layout) == "referenced by name (type mismatch)"


def test_color_references_cover_both_color_families() -> None:
    value_color = _value_asset("accent", AssetType.COLOR, Path("values/colors.xml"), 2)
    state_list = _file_asset("accent", AssetType.COLOR_STATE_LIST, Path("res/color/accent.xml"))

    result = classify([value_color, state_list], {_ref("accent", AssetType.COLOR)})

    assert result.reason_for(value_color) == "referenced"
    assert result.reason_for(state_list) == "referenced"


def test_classify_is_repeatable_and_does_not_mutate_inputs() -> None:
    declared = [_file_asset("a"), _file_asset("b")]
    references = {_ref("a", AssetType.DRAWABLE)}
    patterns = ["^z.*"]
    declared_copy, references_copy, patterns_copy = list(declared), set(references), list(patterns)

    first = classify(declared, references, patterns)
    second = classify(declared, references, patterns)

    assert (first.to_remove, first.to_keep) == (second.to_remove, second.to_keep)
    assert declared == declared_copy
    assert references == references_copy
    assert patterns == patterns_copy


def test_execute_deletes_files_and_records_missing_ones(tmp_path: Path) -> None:
    present = tmp_path / "drawable" / "icon.png"
    present.parent.mkdir()
    present.write_bytes(b"png")
    missing = tmp_path / "drawable" / "gone.png"
    kept = _file_asset("kept", path=tmp_path / "drawable" / "kept.png")

    result = classify(
        [_file_asset("icon", path=present), _file_asset("gone", path=missing), kept],
        {_ref("kept", AssetType.DRAWABLE)},
    )
    report = execute(result)

    assert not present.exists()
    assert [removed.asset.name for removed in report.removed] == ["icon"]
    assert report.removed[0].reason == REMOVAL_REASON
    assert [failure.asset.name for failure in report.failures] == ["gone"]
    assert report.failures[0].message == f"File does not exist: {missing}"
    assert [(item.asset.name, item.reason) for item in report.kept] == [("kept", "referenced")]
    assert not report.is_success


def test_execute_batches_elements_per_file(tmp_path: Path) -> None:
    strings = tmp_path / "values" / "strings.xml"
    strings.parent.mkdir()
    strings.write_text(
        "<resources>\n"
        '    <string name="a">A</string>\n'
        '    <string name="b">B</string>\n'
        '    <string name="c">C</string>\n'
        "</resources>\n",
        encoding="utf-8",
    )
    a = _value_asset("a", AssetType.STRING, strings, 2)
    b = _value_asset("b", AssetType.STRING, strings, 3)
    c = _value_asset("c", AssetType.STRING, strings, 4)

    report = execute(classify([a, b, c], {_ref("b", AssetType.STRING)}))

    assert report.removed_count == 2
    assert report.is_success
    assert strings.read_text(encoding="utf-8") == (
        '<resources>\n    <string name="b">B</string>\n</resources>\n'
    )


def test_execute_deletes_emptied_values_file(tmp_path: Path) -> None:
    strings = tmp_path / "values" / "strings.xml"
    strings.parent.mkdir()
    strings.write_text(
        '<?xml version="1.0" encoding="utf-8"?>\n'
        "<resources>\n"
        '    <string name="a">A</string>\n'
        "\n"
        '    <string name="b">B</string>\n'
        "</resources>\n",
        encoding="utf-8",
    )
    declared = [
        _value_asset("a", AssetType.STRING, strings, 3),
        _value_asset("b", AssetType.STRING, strings, 5),
    ]

    report = execute(classify(declared, set()))

    assert report.removed_count == 2
    assert not strings.exists()


def test_execute_fails_whole_group_on_stale_range(tmp_path: Path) -> None:
    strings = tmp_path / "values" / "strings.xml"
    strings.parent.mkdir()
    original = '<resources>\n    <string name="a">A</string>\n</resources>\n'
    strings.write_text(original, encoding="utf-8")
    ok = _value_asset("a", AssetType.STRING, strings, 2)
    stale = _value_asset("z", AssetType.STRING, strings, 9, 12)

    report = execute(classify([ok, stale], set()))

    assert report.removed_count == 0
    assert {failure.asset.name for failure in report.failures} == {"a", "z"}
    assert all("Invalid line range: 9-12" in failure.message for failure in report.failures)
    assert strings.read_text(encoding="utf-8") == original


def test_report_keeps_classification_reasons() -> None:
    asset = _file_asset("icon")

    report = execute(classify([asset], set(), exclude_types={"drawable"}))

    assert [(item.asset, item.reason) for item in report.kept] == [(asset, "excluded resource type")]
