"""Tests for the ViewBinding class detector."""

from __future__ import annotations

import pytest

from resprune.detectors import BindingClassDetector, binding_class_to_layout
from resprune.detectors.bindings import pascal_to_snake
from resprune.models import AssetType, DetectorKind


@pytest.mark.parametrize(
    ("class_name", "layout"),
    [
        ("ActivityMainBinding", "activity_main"),
        ("FragmentUserProfileBinding", "fragment_user_profile"),
        ("ItemBinding", "item"),
        ("Binding", None),
        ("ActivityMain", None),
    ],
)
def test_binding_class_to_layout(class_name: str, layout) -> None:
    assert binding_class_to_layout(class_name) == layout


def test_pascal_to_snake() -> None:
    assert pascal_to_snake("ListItemHeader") == "list_item_header"


def test_detects_binding_usages(project) -> None:
    project.write(
        {
            "src/main/kotlin/MainActivity.kt": """
                import com.example.databinding.ActivityMainBinding

                class MainActivity {
                    private lateinit var binding: ActivityMainBinding
                    // DialogConfirmBinding is only mentioned in a comment
                    val label = "ItemRowBinding"
                }
            """,
        }
    )

    references = BindingClassDetector().detect([project.sources], [])

    assert {ref.name for ref in references} == {"activity_main"}
    assert {ref.asset_type for ref in references} == {AssetType.LAYOUT}
    assert {ref.kind for ref in references} == {DetectorKind.VIEW_BINDING}
    assert sorted(ref.location.line for ref in references) == [1, 4]


def test_generated_binding_sources_are_skipped(project) -> None:
    project.write(
        {
            "build/generated/data_binding_base_class_source_out/debug/out/com/example/databinding/"
            "ActivityMainBinding.java": "public final class ActivityMainBinding {}\n",
        }
    )

    assert BindingClassDetector().detect([project.path("build")], []) == set()
