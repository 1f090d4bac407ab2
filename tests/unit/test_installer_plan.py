"""Unit tests for the installation step plan."""

from __future__ import annotations

from podsmith.details.installer import INSTALL_STEPS, plan_steps


class TestPlanSteps:
    def test_static_library_target(self, make_aggregate_target) -> None:
        assert plan_steps(make_aggregate_target()) == [
            "add_target",
            "create_support_files_dir",
            "create_support_files_group",
            "create_xcconfig_file",
            "create_embed_frameworks_script",
            "create_bridge_support_file",
            "create_copy_resources_script",
            "create_acknowledgements",
            "create_dummy_source",
        ]

    def test_framework_target(self, make_aggregate_target) -> None:
        steps = plan_steps(make_aggregate_target(requires_frameworks=True))
        assert steps == [name for name, _ in INSTALL_STEPS]

    def test_host_target_skips_embedding(self, make_aggregate_target) -> None:
        steps = plan_steps(
            make_aggregate_target(requires_frameworks=True, requires_host_target=True)
        )
        assert "create_embed_frameworks_script" not in steps
        assert "create_module_map" in steps

    def test_bridge_support_before_resources(self, make_aggregate_target) -> None:
        steps = plan_steps(make_aggregate_target())
        assert steps.index("create_bridge_support_file") < steps.index(
            "create_copy_resources_script"
        )
