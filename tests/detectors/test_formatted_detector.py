"""Tests for the FormattedResources call detector."""

from __future__ import annotations

from resprune.detectors import FormattedResourceDetector, is_formatted_resource_output
from resprune.models import AssetType, DetectorKind


def test_detects_formatted_resource_calls(project) -> None:
    project.write(
        {
            "src/main/kotlin/Greeting.kt": """
                val greeting = FormattedResources.welcome_message(name = "Ann")
                val count = FormattedResources.item_count (3)
                val notACall = FormattedResources.property
                // FormattedResources.commented(1)
            """,
        }
    )

    references = FormattedResourceDetector().detect([project.sources], [])

    assert {ref.name for ref in references} == {"welcome_message", "item_count"}
    assert {ref.asset_type for ref in references} == {AssetType.STRING}
    assert {ref.kind for ref in references} == {DetectorKind.FORMATTED_RESOURCE}


def test_generated_formatted_resources_are_skipped(project) -> None:
    project.write(
        {
            "build/generated/source/paraphrase/main/FormattedResources.kt": """
                object FormattedResources {
                    fun unused_message() = FormattedResources.unused_message()
                }
            """,
        }
    )

    assert FormattedResourceDetector().detect([project.path("build")], []) == set()


def test_is_formatted_resource_output(tmp_path) -> None:
    assert is_formatted_resource_output(tmp_path / "build/generated/source/paraphrase")
    assert not is_formatted_resource_output(tmp_path / "src/main/kotlin/paraphrase")
